import datetime
from io import BytesIO

from django.core.files.base import ContentFile
from django.core.management.base import BaseCommand
from django.db import transaction
from PIL import Image

from showcase.models import (
    ComponentType,
    Project,
    ProjectComponent,
    ProjectTech,
    ResumeBasicInfo,
    ResumeBullet,
    ResumeEntry,
    ResumeSection,
    Tag,
    Tech,
)

TECH = [
    ("Python", "#3776ab"),
    ("Django", "#0c4b33"),
    ("TypeScript", "#3178c6"),
    ("React", "#61dafb"),
    ("Rust", "#dea584"),
    ("PostgreSQL", "#336791"),
]

PROJECTS = [
    {
        "name": "Chess AI",
        "subheading": "Alpha-beta search with a hand-tuned evaluator",
        "date_started": datetime.date(2023, 2, 1),
        "is_pinned": True,
        "color": "#91bf4b",
        "tags": ["games", "ai"],
        "tech": ["Rust"],
    },
    {
        "name": "Portfolio Site",
        "subheading": "This site",
        "date_started": datetime.date(2024, 6, 1),
        "tags": ["web"],
        "tech": ["Python", "Django", "TypeScript", "React"],
    },
    {
        "name": "Blog",
        "date_started": datetime.date(2021, 9, 1),
        "date_ended": datetime.date(2022, 3, 1),
        "tags": ["writing"],
        "tech": [],
    },
]


def _poster(i: int) -> bytes:
    img = Image.new("RGB", (600, 320), (40 * (i + 1) % 255, 120, 180))
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class Command(BaseCommand):
    help = "Seed demo projects, components and resume data (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--with-posters", action="store_true", help="Generate and upload poster images.")

    @transaction.atomic
    def handle(self, *args, **options):
        techs = {}
        for name, color in TECH:
            techs[name], _ = Tech.objects.get_or_create(name=name, defaults={"color": color})

        projects = {}
        for i, meta in enumerate(PROJECTS):
            project, created = Project.objects.get_or_create(
                name=meta["name"],
                defaults={
                    "subheading": meta.get("subheading"),
                    "date_started": meta["date_started"],
                    "date_ended": meta.get("date_ended"),
                    "is_pinned": meta.get("is_pinned", False),
                    "color": meta.get("color"),
                    "display_order": i,
                },
            )
            projects[project.name] = project
            for tag_name in meta["tags"]:
                tag, _ = Tag.objects.get_or_create(name=tag_name)
                project.tags.add(tag)
            for order, tech_name in enumerate(meta["tech"]):
                ProjectTech.objects.get_or_create(
                    project=project, tech=techs[tech_name], defaults={"display_order": order}
                )
            if options["with_posters"] and not project.poster_image:
                project.poster_image.save(f"project_{i + 1}.png", ContentFile(_poster(i)), save=True)

        chess = projects["Chess AI"]
        if not chess.components.exists():
            blocks = [
                (ComponentType.TITLE, {"title": "Chess AI", "subtitle": "A weekend engine that got out of hand"}),
                (ComponentType.ABOUT, {"text": "An engine written in **Rust** that plays at club level."}),
                (ComponentType.TECH_STACK, {}),
                (ComponentType.MERMAID, {"diagram_code": "flowchart LR\n  Board --> Search --> Eval", "title": "Pipeline"}),
                (ComponentType.VIDEO, {"video_url": "https://youtu.be/dQw4w9WgXcQ", "caption": "Demo game"}),
                (ComponentType.REPOSITORY_LINKS, {"github_url": "https://github.com/example/chess-ai"}),
                (ComponentType.RELATED_PROJECTS, {"project_ids": [projects["Portfolio Site"].pk]}),
            ]
            for order, (kind, data) in enumerate(blocks):
                ProjectComponent.objects.create(project=chess, component_type=kind, component_data=data, display_order=order)

        if not ResumeBasicInfo.objects.exists():
            ResumeBasicInfo.objects.create(full_name="Your Name", email="you@example.com", location="Remote")
        section, _ = ResumeSection.objects.get_or_create(
            title="Experience", defaults={"section_type": "experience", "display_order": 0}
        )
        entry, _ = ResumeEntry.objects.get_or_create(
            section=section,
            title="Software Engineer",
            defaults={"subtitle": "Awesome Co", "start_date": datetime.date(2023, 1, 1), "is_current": True},
        )
        if not entry.bullets.exists():
            ResumeBullet.objects.create(entry=entry, content="Built the public API and admin tooling.", display_order=0)

        self.stdout.write(self.style.SUCCESS(f"Seed data created/updated: {len(projects)} projects."))
