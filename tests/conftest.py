"""
Pytest configuration and fixtures
"""
import datetime

import pytest
from rest_framework.test import APIClient

from showcase.models import ComponentType, Project, ProjectComponent, ProjectTech, Tag, Tech


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(django_user_model):
    return django_user_model.objects.create_user(username="admin", password="pw", is_staff=True)


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def make_project(db):
    def _make(name="Project", date_started=datetime.date(2022, 1, 1), tags=(), tech=(), **kwargs):
        project = Project.objects.create(name=name, date_started=date_started, **kwargs)
        for tag_name in tags:
            tag, _ = Tag.objects.get_or_create(name=tag_name)
            project.tags.add(tag)
        for order, tech_name in enumerate(tech):
            master, _ = Tech.objects.get_or_create(name=tech_name)
            ProjectTech.objects.create(project=project, tech=master, display_order=order)
        return project

    return _make


@pytest.fixture
def chess_project(make_project):
    project = make_project(
        name="Chess AI",
        subheading="Search engine",
        date_started=datetime.date(2020, 5, 1),
        is_pinned=True,
        color="#91bf4b",
        tags=["games"],
        tech=["Rust", "Python"],
    )
    ProjectComponent.objects.create(
        project=project, component_type=ComponentType.TITLE, component_data={"title": "Chess AI!"}, display_order=0
    )
    ProjectComponent.objects.create(
        project=project, component_type=ComponentType.TEXT, component_data={"text": "Hello"}, display_order=2
    )
    ProjectComponent.objects.create(
        project=project, component_type=ComponentType.TECH_STACK, component_data={}, display_order=1
    )
    return project


@pytest.fixture
def wire_project():
    """A detail-shaped project as the read API returns it."""
    return {
        "id": 1,
        "name": "Chess AI",
        "subheading": "Search engine",
        "date_started": "2020-05-01",
        "date_ended": None,
        "is_pinned": True,
        "poster_image_url": None,
        "display_order": 0,
        "color": "#91bf4b",
        "tags": [{"id": 1, "name": "games", "color": None}],
        "tech_stack": [
            {"id": 2, "tech_id": 2, "name": "Python", "color": None, "image_url": None, "display_order": 1},
            {"id": 1, "tech_id": 1, "name": "Rust", "color": "#dea584", "image_url": None, "display_order": 0},
        ],
        "components": [],
    }
