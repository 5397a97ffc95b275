import logging

from django.db.models import Prefetch
from django_filters import rest_framework as df
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from . import uploads
from .components import (
    MalformedComponentData,
    RelatedProjectsData,
    parse_component_data,
    render_components,
    resolve_header,
)
from .listing import PinnedFilter, SortOption, filter_projects, sort_projects
from .models import (
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
    next_display_order,
)
from .serializers import (
    ComponentCreateSerializer,
    ComponentUpdateSerializer,
    ImageUploadSerializer,
    ProjectComponentSerializer,
    ProjectDetailSerializer,
    ProjectSerializer,
    ProjectTagCreateSerializer,
    ProjectTechCreateSerializer,
    ProjectWriteSerializer,
    ReorderSerializer,
    ResumeBasicInfoSerializer,
    ResumeBulletSerializer,
    ResumeEntrySerializer,
    ResumeSectionSerializer,
    TagSerializer,
    TechSerializer,
    TechStackItemSerializer,
    VideoOrImageUploadSerializer,
)
from .theme import pick_theme

logger = logging.getLogger(__name__)


def envelope(data, status_code=status.HTTP_200_OK):
    return Response({"success": True, "data": data}, status=status_code)


def project_queryset():
    return Project.objects.prefetch_related(
        "tags",
        Prefetch("tech_links", queryset=ProjectTech.objects.select_related("tech")),
        "components",
    )


class ProjectFilter(df.FilterSet):
    name = df.CharFilter(field_name="name", lookup_expr="icontains")
    tag = df.CharFilter(field_name="tags__name", lookup_expr="iexact", distinct=True)
    isPinned = df.BooleanFilter(field_name="is_pinned")

    class Meta:
        model = Project
        fields = ["name", "tag", "isPinned"]


def _related_summaries(components):
    """Look up every project referenced by related_projects components."""
    ids = set()
    for component in components:
        if component.get("component_type") != ComponentType.RELATED_PROJECTS:
            continue
        try:
            data = parse_component_data(component.get("component_data"))
        except MalformedComponentData:
            continue
        # Same coercion the renderer applies, so "7" and 7 name the same project
        contract = RelatedProjectsData(data=data)
        if contract.is_valid():
            ids.update(contract.validated_data["project_ids"])
    if not ids:
        return {}
    projects = project_queryset().filter(pk__in=ids)
    return {p["id"]: p for p in ProjectSerializer(projects, many=True).data}


class ProjectViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = project_queryset()
    serializer_class = ProjectSerializer
    permission_classes = [AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProjectFilter

    @extend_schema(
        parameters=[
            OpenApiParameter("search", str, description="Matches name, tag names and tech names"),
            OpenApiParameter("pinned", str, enum=[p.value for p in PinnedFilter]),
            OpenApiParameter("sort", str, enum=[s.value for s in SortOption]),
        ]
    )
    def list(self, request, *args, **kwargs):
        params = request.query_params
        try:
            pinned = PinnedFilter(params.get("pinned") or PinnedFilter.ALL)
            sort = SortOption(params.get("sort") or SortOption.DATE_NEWEST)
        except ValueError as exc:
            raise ValidationError({"detail": str(exc)}) from exc
        projects = self.get_serializer(self.filter_queryset(self.get_queryset()), many=True).data
        projects = sort_projects(filter_projects(projects, query=params.get("search", ""), pinned=pinned), sort)
        return envelope({"projects": projects, "count": len(projects)})

    def retrieve(self, request, *args, **kwargs):
        project = self.get_object()
        return envelope({"project": ProjectDetailSerializer(project).data})

    @action(detail=True, methods=["get"])
    def blocks(self, request, pk=None):
        project = ProjectDetailSerializer(self.get_object()).data
        components = project["components"]
        blocks = render_components(components, project, related=_related_summaries(components))
        return envelope({"header": resolve_header(project), "blocks": [b.as_dict() for b in blocks]})


class ResumeView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(responses={200: None})
    def get(self, request):
        basic = ResumeBasicInfo.objects.first()
        sections = ResumeSection.objects.filter(is_visible=True).prefetch_related("entries__bullets")
        return envelope({
            "basic_info": ResumeBasicInfoSerializer(basic).data if basic else None,
            "sections": ResumeSectionSerializer(sections, many=True).data,
        })


class ThemeView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(parameters=[OpenApiParameter("scheme", str, enum=["light", "dark"])], responses={200: None})
    def get(self, request):
        dark = request.query_params.get("scheme") == "dark"
        return envelope({"theme": pick_theme(dark=dark)})


# Admin write API


class AdminProjectViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAdminUser]
    queryset = project_queryset()
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["is_pinned"]
    search_fields = ["name", "subheading"]
    ordering_fields = ["display_order", "date_started", "name", "id"]

    def get_serializer_class(self):
        if self.action in ("list", "retrieve"):
            return ProjectDetailSerializer
        return ProjectWriteSerializer

    @extend_schema(request=ProjectTagCreateSerializer, responses={201: TagSerializer})
    @action(detail=True, methods=["post"], url_path="tags")
    def add_tag(self, request, pk=None):
        project = self.get_object()
        s = ProjectTagCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        name = s.validated_data["name"].strip()
        tag = Tag.objects.filter(name__iexact=name).first()
        if tag is None:
            tag = Tag.objects.create(name=name, color=s.validated_data.get("color") or None)
        project.tags.add(tag)
        return Response(TagSerializer(tag).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["delete"], url_path=r"tags/(?P<tag_id>\d+)")
    def remove_tag(self, request, pk=None, tag_id=None):
        project = self.get_object()
        project.tags.remove(int(tag_id))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ProjectTechCreateSerializer, responses={201: TechStackItemSerializer})
    @action(detail=True, methods=["post"], url_path="tech-stack")
    def add_tech(self, request, pk=None):
        project = self.get_object()
        s = ProjectTechCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        name = data["name"].strip()
        tech = Tech.objects.filter(name__iexact=name).first()
        if tech is None:
            tech = Tech.objects.create(name=name, color=data.get("color") or None, image_url=data.get("image_url") or None)
        if project.tech_links.filter(tech=tech).exists():
            raise ValidationError({"name": f"{tech.name} is already in this project's tech stack."})
        link = ProjectTech.objects.create(
            project=project, tech=tech, display_order=next_display_order(project.tech_links.all())
        )
        return Response(TechStackItemSerializer(link).data, status=status.HTTP_201_CREATED)


class AdminTagViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAdminUser]
    queryset = Tag.objects.all()
    serializer_class = TagSerializer
    http_method_names = ["get", "put", "patch", "delete", "head", "options"]


class AdminTechViewSet(viewsets.ModelViewSet):
    """Master tech records. Changes apply to every linked project."""

    permission_classes = [IsAdminUser]
    queryset = Tech.objects.all()
    serializer_class = TechSerializer
    filter_backends = [filters.SearchFilter]
    search_fields = ["name"]

    @action(detail=True, methods=["get"])
    def usage(self, request, pk=None):
        return Response({"count": self.get_object().project_links.count()})

    @action(detail=True, methods=["get"])
    def projects(self, request, pk=None):
        tech = self.get_object()
        rows = Project.objects.filter(tech_links__tech=tech).order_by("name").values("id", "name")
        return Response(list(rows))


class AdminTechLinkViewSet(mixins.DestroyModelMixin, viewsets.GenericViewSet):
    permission_classes = [IsAdminUser]
    queryset = ProjectTech.objects.all()
    serializer_class = TechStackItemSerializer


class AdminComponentViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """Create, edit data, delete. Changing a component's type is delete + create."""

    permission_classes = [IsAdminUser]
    queryset = ProjectComponent.objects.all()
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["project", "component_type"]

    def get_serializer_class(self):
        if self.action == "create":
            return ComponentCreateSerializer
        if self.action in ("update", "partial_update"):
            return ComponentUpdateSerializer
        return ProjectComponentSerializer


class AdminResumeSectionViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAdminUser]
    queryset = ResumeSection.objects.prefetch_related("entries__bullets")
    serializer_class = ResumeSectionSerializer


class AdminResumeEntryViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAdminUser]
    queryset = ResumeEntry.objects.prefetch_related("bullets")
    serializer_class = ResumeEntrySerializer
    filterset_fields = ["section"]


class AdminResumeBulletViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAdminUser]
    queryset = ResumeBullet.objects.all()
    serializer_class = ResumeBulletSerializer
    filterset_fields = ["entry"]


class BasicInfoView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(responses={200: ResumeBasicInfoSerializer})
    def get(self, request):
        basic = ResumeBasicInfo.objects.first()
        return Response(ResumeBasicInfoSerializer(basic).data if basic else {})

    @extend_schema(request=ResumeBasicInfoSerializer, responses={200: ResumeBasicInfoSerializer})
    def put(self, request):
        s = ResumeBasicInfoSerializer(ResumeBasicInfo.objects.first(), data=request.data)
        s.is_valid(raise_exception=True)
        s.save()
        return Response(s.data)


class ReorderView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(request=ReorderSerializer, responses={200: None})
    def put(self, request):
        s = ReorderSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        count = s.save()
        logger.info("Reordered %d %s", count, s.validated_data["type"])
        return Response({"success": True, "updated": count})


class UploadImageView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(request=ImageUploadSerializer, responses={201: None})
    def post(self, request):
        s = ImageUploadSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        stored = uploads.store_image(s.validated_data["image"], s.validated_data["filename"])
        return Response({"success": True, "url": stored.url}, status=status.HTTP_201_CREATED)


class UploadMediaView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(request=VideoOrImageUploadSerializer, responses={201: None})
    def post(self, request):
        s = VideoOrImageUploadSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        stored = uploads.store_media(s.validated_data["media"], s.validated_data["filename"])
        return Response({"success": True, "url": stored.url, "mediaType": stored.media_type}, status=status.HTTP_201_CREATED)
