from django.contrib import admin

from .models import (
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


class ProjectTechInline(admin.TabularInline):
    model = ProjectTech
    extra = 0
    autocomplete_fields = ("tech",)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("name", "date_started", "date_ended", "is_pinned", "display_order")
    list_filter = ("is_pinned", "tags")
    search_fields = ("name", "subheading")
    filter_horizontal = ("tags",)
    readonly_fields = ("poster_image_url",)
    inlines = [ProjectTechInline]


@admin.register(ProjectComponent)
class ProjectComponentAdmin(admin.ModelAdmin):
    list_display = ("project", "component_type", "display_order")
    list_filter = ("component_type",)

    def get_readonly_fields(self, request, obj=None):
        return ("component_type",) if obj else ()


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ("name", "color")
    search_fields = ("name",)


@admin.register(Tech)
class TechAdmin(admin.ModelAdmin):
    list_display = ("name", "color", "image_url")
    search_fields = ("name",)


@admin.register(ResumeBasicInfo)
class ResumeBasicInfoAdmin(admin.ModelAdmin):
    list_display = ("full_name", "email", "location")


class ResumeBulletInline(admin.TabularInline):
    model = ResumeBullet
    extra = 0


@admin.register(ResumeEntry)
class ResumeEntryAdmin(admin.ModelAdmin):
    list_display = ("title", "section", "start_date", "end_date", "is_current", "display_order")
    list_filter = ("section", "is_current")
    inlines = [ResumeBulletInline]


class ResumeEntryInline(admin.TabularInline):
    model = ResumeEntry
    extra = 0
    fields = ("title", "subtitle", "start_date", "end_date", "is_current", "display_order")


@admin.register(ResumeSection)
class ResumeSectionAdmin(admin.ModelAdmin):
    list_display = ("title", "section_type", "is_visible", "display_order")
    list_filter = ("is_visible",)
    inlines = [ResumeEntryInline]
