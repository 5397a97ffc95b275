from django.db import IntegrityError, transaction
from rest_framework import serializers

from .components import MalformedComponentData, parse_component_data
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


class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ["id", "name", "color"]


class TechSerializer(serializers.ModelSerializer):
    usage_count = serializers.SerializerMethodField()

    class Meta:
        model = Tech
        fields = ["id", "name", "color", "image_url", "usage_count"]
        read_only_fields = ["usage_count"]

    def get_usage_count(self, obj: Tech):
        return obj.project_links.count()


class TechStackItemSerializer(serializers.ModelSerializer):
    """A project's link to a master Tech, flattened for the wire."""

    tech_id = serializers.IntegerField(source="tech.id", read_only=True)
    name = serializers.CharField(source="tech.name", read_only=True)
    color = serializers.CharField(source="tech.color", read_only=True, allow_null=True)
    image_url = serializers.CharField(source="tech.image_url", read_only=True, allow_null=True)

    class Meta:
        model = ProjectTech
        fields = ["id", "tech_id", "name", "color", "image_url", "display_order"]


class ProjectSerializer(serializers.ModelSerializer):
    tags = TagSerializer(many=True, read_only=True)
    tech_stack = TechStackItemSerializer(source="tech_links", many=True, read_only=True)

    class Meta:
        model = Project
        fields = [
            "id",
            "name",
            "subheading",
            "date_started",
            "date_ended",
            "is_pinned",
            "poster_image_url",
            "display_order",
            "tags",
            "tech_stack",
        ]


class ProjectComponentSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ProjectComponent
        fields = ["id", "project_id", "component_type", "component_data", "display_order"]


class ProjectDetailSerializer(ProjectSerializer):
    color = serializers.CharField(source="resolved_color", read_only=True)
    components = ProjectComponentSerializer(many=True, read_only=True)

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ["color", "components"]


class ProjectWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = [
            "id",
            "name",
            "subheading",
            "date_started",
            "date_ended",
            "is_pinned",
            "color",
            "poster_image",
            "poster_image_url",
            "display_order",
        ]
        read_only_fields = ["display_order"]

    def validate(self, attrs):
        started = attrs.get("date_started", getattr(self.instance, "date_started", None))
        ended = attrs.get("date_ended", getattr(self.instance, "date_ended", None))
        if started and ended and ended < started:
            raise serializers.ValidationError({"date_ended": "End date cannot be before the start date."})
        return attrs

    def create(self, validated_data):
        validated_data["display_order"] = next_display_order(Project.objects.all())
        return super().create(validated_data)


class ComponentDataField(serializers.JSONField):
    """Accepts component_data as an object or as JSON text; always stores an object."""

    def to_internal_value(self, data):
        try:
            return parse_component_data(data)
        except MalformedComponentData as exc:
            raise serializers.ValidationError(str(exc)) from exc


class ComponentCreateSerializer(serializers.ModelSerializer):
    project_id = serializers.PrimaryKeyRelatedField(source="project", queryset=Project.objects.all())
    component_type = serializers.ChoiceField(choices=ComponentType.choices)
    component_data = ComponentDataField(required=False)

    class Meta:
        model = ProjectComponent
        fields = ["id", "project_id", "component_type", "component_data", "display_order"]
        read_only_fields = ["display_order"]

    def create(self, validated_data):
        validated_data.setdefault("component_data", {})
        with transaction.atomic():
            project = Project.objects.select_for_update().get(pk=validated_data["project"].pk)
            validated_data["display_order"] = next_display_order(project.components.all())
            return super().create(validated_data)


class ComponentUpdateSerializer(serializers.ModelSerializer):
    """Only the data of an existing component can change.

    component_type may be echoed back unchanged; a different value is
    rejected because each type carries its own data shape.
    """

    project_id = serializers.IntegerField(read_only=True)
    component_type = serializers.CharField(required=False)
    component_data = ComponentDataField()

    class Meta:
        model = ProjectComponent
        fields = ["id", "project_id", "component_type", "component_data", "display_order"]
        read_only_fields = ["display_order"]

    def validate_component_type(self, value):
        if self.instance is not None and value != self.instance.component_type:
            raise serializers.ValidationError(
                "component_type cannot be changed. Delete this component and create a new one."
            )
        return value


class ProjectTagCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=60)
    color = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)


class ProjectTechCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=80)
    color = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    image_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)


class ResumeBulletSerializer(serializers.ModelSerializer):
    entry_id = serializers.PrimaryKeyRelatedField(source="entry", queryset=ResumeEntry.objects.all())

    class Meta:
        model = ResumeBullet
        fields = ["id", "entry_id", "content", "display_order"]
        read_only_fields = ["display_order"]

    def create(self, validated_data):
        validated_data["display_order"] = next_display_order(validated_data["entry"].bullets.all())
        return super().create(validated_data)


class ResumeEntrySerializer(serializers.ModelSerializer):
    section_id = serializers.PrimaryKeyRelatedField(source="section", queryset=ResumeSection.objects.all())
    bullets = ResumeBulletSerializer(many=True, read_only=True)

    class Meta:
        model = ResumeEntry
        fields = [
            "id",
            "section_id",
            "title",
            "subtitle",
            "location",
            "start_date",
            "end_date",
            "is_current",
            "description",
            "display_order",
            "bullets",
        ]
        read_only_fields = ["display_order"]

    def validate(self, attrs):
        # A current entry has no end date
        if attrs.get("is_current"):
            attrs["end_date"] = None
        return attrs

    def create(self, validated_data):
        validated_data["display_order"] = next_display_order(validated_data["section"].entries.all())
        return super().create(validated_data)


class ResumeSectionSerializer(serializers.ModelSerializer):
    entries = ResumeEntrySerializer(many=True, read_only=True)

    class Meta:
        model = ResumeSection
        fields = ["id", "title", "section_type", "display_order", "is_visible", "entries"]
        read_only_fields = ["display_order"]

    def create(self, validated_data):
        validated_data["display_order"] = next_display_order(ResumeSection.objects.all())
        return super().create(validated_data)


class ResumeBasicInfoSerializer(serializers.ModelSerializer):
    class Meta:
        model = ResumeBasicInfo
        fields = [
            "id",
            "full_name",
            "email",
            "phone",
            "linkedin_url",
            "github_url",
            "website_url",
            "location",
            "summary",
        ]


class ReorderItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    display_order = serializers.IntegerField(min_value=0)


class ReorderSerializer(serializers.Serializer):
    TYPES = {
        "sections": ResumeSection,
        "entries": ResumeEntry,
        "bullets": ResumeBullet,
        "projects": Project,
        "tech_stack": ProjectTech,
        "components": ProjectComponent,
    }

    # Parent field that display_order is counted within
    SCOPES = {
        "sections": None,
        "entries": "section_id",
        "bullets": "entry_id",
        "projects": None,
        "tech_stack": "project_id",
        "components": "project_id",
    }
    # Types whose order is unique in the schema; rows left out of a request keep their slot
    UNIQUE_ORDER = {"components"}

    type = serializers.ChoiceField(choices=sorted(TYPES))
    items = ReorderItemSerializer(many=True, allow_empty=False)

    def validate_items(self, items):
        ids = [i["id"] for i in items]
        if len(set(ids)) != len(ids):
            raise serializers.ValidationError("Each id may appear only once.")
        return items

    def validate(self, attrs):
        kind = attrs["type"]
        model = self.TYPES[kind]
        scope = self.SCOPES[kind]
        targets = {i["id"]: i["display_order"] for i in attrs["items"]}
        columns = ["pk", scope] if scope else ["pk"]
        parents = {row[0]: row[-1] if scope else None for row in model.objects.filter(pk__in=targets).values_list(*columns)}
        missing = sorted(set(targets) - set(parents))
        if missing:
            raise serializers.ValidationError({"items": f"Unknown {kind} ids: {missing}"})

        slots = {}
        for pk, order in targets.items():
            slot = (parents[pk], order)
            if slot in slots:
                raise serializers.ValidationError(
                    {"items": f"{kind} {slots[slot]} and {pk} both target display_order {order}."}
                )
            slots[slot] = pk

        if kind in self.UNIQUE_ORDER:
            held = (
                model.objects.filter(**{f"{scope}__in": {parent for parent, _ in slots}})
                .exclude(pk__in=targets)
                .values_list(scope, "display_order", "pk")
            )
            for parent, order, pk in held:
                if (parent, order) in slots:
                    raise serializers.ValidationError(
                        {"items": f"display_order {order} is held by {kind} {pk}, which is not part of this reorder."}
                    )
        return attrs

    def save(self):
        model = self.TYPES[self.validated_data["type"]]
        items = self.validated_data["items"]
        try:
            with transaction.atomic():
                # Park every row on a negative slot first so unique orders never collide mid-update
                for item in items:
                    model.objects.filter(pk=item["id"]).update(display_order=-(item["display_order"] + 1))
                for item in items:
                    model.objects.filter(pk=item["id"]).update(display_order=item["display_order"])
        except IntegrityError as exc:
            raise serializers.ValidationError({"items": "Reorder would give two rows the same display_order."}) from exc
        return len(items)


class MediaUploadSerializer(serializers.Serializer):
    filename = serializers.CharField(max_length=200)


class ImageUploadSerializer(MediaUploadSerializer):
    image = serializers.CharField()


class VideoOrImageUploadSerializer(MediaUploadSerializer):
    media = serializers.CharField()
