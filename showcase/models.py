from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Max


def next_display_order(queryset) -> int:
    """Return the order value that places a new row after every row in ``queryset``."""
    current = queryset.aggregate(m=Max("display_order"))["m"]
    return 0 if current is None else current + 1


class ComponentType(models.TextChoices):
    TITLE = "title", "Title"
    ABOUT = "about", "About"
    TECH_STACK = "tech_stack", "Tech stack"
    IMAGE_CAROUSEL = "image_carousel", "Image carousel"
    TEXT = "text", "Text"
    TEXT_WITH_TITLE = "text_with_title", "Text with title"
    VIDEO = "video", "Video"
    TEXT_WITH_IMAGE = "text_with_image", "Text with image"
    TEXT_IMAGE_TITLE = "text_image_title", "Text, image and title"
    SINGLE_IMAGE = "single_image", "Single image"
    REPOSITORY_LINKS = "repository_links", "Repository links"
    RELATED_PROJECTS = "related_projects", "Related projects"
    MERMAID = "mermaid", "Mermaid diagram"


class Tag(models.Model):
    name = models.CharField(max_length=60, unique=True)
    color = models.CharField(max_length=20, blank=True, null=True, help_text="CSS color or hex, e.g. #f96ba4")

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return self.name


class Tech(models.Model):
    """Master tech record shared by every project that links to it.

    Projects reference a Tech through ProjectTech, so renaming or recoloring
    a Tech shows up on all of them at once.
    """

    name = models.CharField(max_length=80, unique=True)
    color = models.CharField(max_length=20, blank=True, null=True, help_text="CSS color or hex")
    image_url = models.URLField(blank=True, null=True, help_text="Icon URL")

    class Meta:
        ordering = ["name", "id"]
        verbose_name_plural = "tech"

    def __str__(self):
        return self.name


class Project(models.Model):
    name = models.CharField(max_length=200)
    subheading = models.CharField(max_length=300, blank=True, null=True)
    date_started = models.DateField()
    date_ended = models.DateField(null=True, blank=True)
    is_pinned = models.BooleanField(default=False)
    color = models.CharField(max_length=20, blank=True, null=True, help_text="Accent color for the detail page")
    poster_image = models.ImageField(upload_to="projects/", blank=True, null=True)
    poster_image_url = models.URLField(blank=True, null=True)
    display_order = models.IntegerField(default=0)
    tags = models.ManyToManyField(Tag, blank=True, related_name="projects")

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return self.name

    @property
    def resolved_color(self) -> str:
        return self.color or settings.DEFAULT_PROJECT_COLOR

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        # Keep poster_image_url in step with the active storage backend
        if self.poster_image:
            try:
                new_url = self.poster_image.url
            except ValueError:
                new_url = None
            if new_url and new_url != self.poster_image_url:
                self.poster_image_url = new_url
                type(self).objects.filter(pk=self.pk).update(poster_image_url=new_url)


class ProjectTech(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="tech_links")
    tech = models.ForeignKey(Tech, on_delete=models.CASCADE, related_name="project_links")
    display_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]
        constraints = [
            models.UniqueConstraint(fields=["project", "tech"], name="unique_tech_per_project"),
        ]

    def __str__(self):
        return f"{self.tech.name} @ {self.project.name}"


class ProjectComponent(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="components")
    component_type = models.CharField(max_length=40, choices=ComponentType.choices)
    # Shape depends on component_type; interpreted by showcase.components at render time
    component_data = models.JSONField(default=dict, blank=True)
    display_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]
        constraints = [
            models.UniqueConstraint(fields=["project", "display_order"], name="unique_component_order_per_project"),
        ]

    def __str__(self):
        return f"{self.component_type} #{self.display_order} ({self.project_id})"

    def save(self, *args, **kwargs):
        if self.pk:
            stored = type(self).objects.filter(pk=self.pk).values_list("component_type", flat=True).first()
            if stored is not None and stored != self.component_type:
                raise ValidationError("component_type cannot change; delete the component and create a new one.")
        super().save(*args, **kwargs)


class ResumeBasicInfo(models.Model):
    full_name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=40, blank=True, null=True)
    linkedin_url = models.URLField(blank=True, null=True)
    github_url = models.URLField(blank=True, null=True)
    website_url = models.URLField(blank=True, null=True)
    location = models.CharField(max_length=120, blank=True, null=True)
    summary = models.TextField(blank=True, null=True)

    class Meta:
        verbose_name_plural = "resume basic info"

    def __str__(self):
        return self.full_name

    def save(self, *args, **kwargs):
        # Singleton: only one row allowed
        if not self.pk and type(self).objects.exists():
            raise ValidationError("Only one ResumeBasicInfo instance is allowed. Update the existing one instead.")
        super().save(*args, **kwargs)


class ResumeSection(models.Model):
    title = models.CharField(max_length=120)
    section_type = models.CharField(max_length=40, blank=True, help_text="e.g. experience, education, skills")
    display_order = models.IntegerField(default=0)
    is_visible = models.BooleanField(default=True)

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return self.title


class ResumeEntry(models.Model):
    section = models.ForeignKey(ResumeSection, on_delete=models.CASCADE, related_name="entries")
    title = models.CharField(max_length=200)
    subtitle = models.CharField(max_length=200, blank=True, null=True)
    location = models.CharField(max_length=120, blank=True, null=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    is_current = models.BooleanField(default=False)
    description = models.TextField(blank=True, null=True)
    display_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]
        verbose_name_plural = "resume entries"

    def __str__(self):
        return self.title


class ResumeBullet(models.Model):
    entry = models.ForeignKey(ResumeEntry, on_delete=models.CASCADE, related_name="bullets")
    content = models.TextField()
    display_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return self.content[:60]
