import json

from django.core.management.base import BaseCommand, CommandError

from showcase.client import APIError, PortfolioClient
from showcase.components import render_components, resolve_header
from showcase.models import Project
from showcase.serializers import ProjectDetailSerializer, ProjectSerializer


class Command(BaseCommand):
    help = "Print the render description of a project's detail page as JSON."

    def add_arguments(self, parser):
        parser.add_argument("project_id", type=int)
        parser.add_argument(
            "--api-url",
            default=None,
            help="Fetch the project from this read API instead of the local database.",
        )

    def handle(self, *args, **options):
        project_id = options["project_id"]
        if options["api_url"]:
            client = PortfolioClient(options["api_url"])
            try:
                project = client.get_project(project_id)
                related = {p["id"]: p for p in client.list_projects()}
            except APIError as exc:
                raise CommandError(str(exc)) from exc
        else:
            instance = Project.objects.filter(pk=project_id).first()
            if instance is None:
                raise CommandError(f"Project {project_id} does not exist.")
            project = ProjectDetailSerializer(instance).data
            related = {p["id"]: p for p in ProjectSerializer(Project.objects.all(), many=True).data}

        blocks = render_components(project.get("components") or [], project, related=related)
        payload = {"header": resolve_header(project), "blocks": [b.as_dict() for b in blocks]}
        self.stdout.write(json.dumps(payload, indent=2, default=str))
        errors = sum(1 for b in blocks if b.is_error)
        if errors:
            self.stderr.write(self.style.WARNING(f"{errors} component(s) rendered as errors."))
