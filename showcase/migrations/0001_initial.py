import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ResumeBasicInfo",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(max_length=200)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("phone", models.CharField(blank=True, max_length=40, null=True)),
                ("linkedin_url", models.URLField(blank=True, null=True)),
                ("github_url", models.URLField(blank=True, null=True)),
                ("website_url", models.URLField(blank=True, null=True)),
                ("location", models.CharField(blank=True, max_length=120, null=True)),
                ("summary", models.TextField(blank=True, null=True)),
            ],
            options={
                "verbose_name_plural": "resume basic info",
            },
        ),
        migrations.CreateModel(
            name="ResumeSection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=120)),
                (
                    "section_type",
                    models.CharField(blank=True, help_text="e.g. experience, education, skills", max_length=40),
                ),
                ("display_order", models.IntegerField(default=0)),
                ("is_visible", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="Tag",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=60, unique=True)),
                (
                    "color",
                    models.CharField(blank=True, help_text="CSS color or hex, e.g. #f96ba4", max_length=20, null=True),
                ),
            ],
            options={
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="Tech",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=80, unique=True)),
                ("color", models.CharField(blank=True, help_text="CSS color or hex", max_length=20, null=True)),
                ("image_url", models.URLField(blank=True, help_text="Icon URL", null=True)),
            ],
            options={
                "verbose_name_plural": "tech",
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("subheading", models.CharField(blank=True, max_length=300, null=True)),
                ("date_started", models.DateField()),
                ("date_ended", models.DateField(blank=True, null=True)),
                ("is_pinned", models.BooleanField(default=False)),
                (
                    "color",
                    models.CharField(
                        blank=True, help_text="Accent color for the detail page", max_length=20, null=True
                    ),
                ),
                ("poster_image", models.ImageField(blank=True, null=True, upload_to="projects/")),
                ("poster_image_url", models.URLField(blank=True, null=True)),
                ("display_order", models.IntegerField(default=0)),
                ("tags", models.ManyToManyField(blank=True, related_name="projects", to="showcase.tag")),
            ],
            options={
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="ProjectComponent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "component_type",
                    models.CharField(
                        choices=[
                            ("title", "Title"),
                            ("about", "About"),
                            ("tech_stack", "Tech stack"),
                            ("image_carousel", "Image carousel"),
                            ("text", "Text"),
                            ("text_with_title", "Text with title"),
                            ("video", "Video"),
                            ("text_with_image", "Text with image"),
                            ("text_image_title", "Text, image and title"),
                            ("single_image", "Single image"),
                            ("repository_links", "Repository links"),
                            ("related_projects", "Related projects"),
                            ("mermaid", "Mermaid diagram"),
                        ],
                        max_length=40,
                    ),
                ),
                ("component_data", models.JSONField(blank=True, default=dict)),
                ("display_order", models.IntegerField(default=0)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="components", to="showcase.project"
                    ),
                ),
            ],
            options={
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="ProjectTech",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("display_order", models.IntegerField(default=0)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="tech_links", to="showcase.project"
                    ),
                ),
                (
                    "tech",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="project_links", to="showcase.tech"
                    ),
                ),
            ],
            options={
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="ResumeEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("subtitle", models.CharField(blank=True, max_length=200, null=True)),
                ("location", models.CharField(blank=True, max_length=120, null=True)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("is_current", models.BooleanField(default=False)),
                ("description", models.TextField(blank=True, null=True)),
                ("display_order", models.IntegerField(default=0)),
                (
                    "section",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="entries", to="showcase.resumesection"
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "resume entries",
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="ResumeBullet",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content", models.TextField()),
                ("display_order", models.IntegerField(default=0)),
                (
                    "entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="bullets", to="showcase.resumeentry"
                    ),
                ),
            ],
            options={
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="projectcomponent",
            constraint=models.UniqueConstraint(
                fields=("project", "display_order"), name="unique_component_order_per_project"
            ),
        ),
        migrations.AddConstraint(
            model_name="projecttech",
            constraint=models.UniqueConstraint(fields=("project", "tech"), name="unique_tech_per_project"),
        ),
    ]
