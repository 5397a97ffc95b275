"""
Tests for the resume read endpoint and the resume admin API
"""
import datetime

import pytest
from django.core.exceptions import ValidationError

from showcase.models import ResumeBasicInfo, ResumeBullet, ResumeEntry, ResumeSection

pytestmark = pytest.mark.django_db


@pytest.fixture
def resume():
    ResumeBasicInfo.objects.create(full_name="Ada Lovelace", email="ada@example.com")
    education = ResumeSection.objects.create(title="Education", display_order=1)
    experience = ResumeSection.objects.create(title="Experience", display_order=0)
    ResumeSection.objects.create(title="Hobbies", display_order=2, is_visible=False)
    job = ResumeEntry.objects.create(
        section=experience, title="Engineer", start_date=datetime.date(2022, 1, 1), is_current=True
    )
    ResumeBullet.objects.create(entry=job, content="Second", display_order=1)
    ResumeBullet.objects.create(entry=job, content="First", display_order=0)
    ResumeEntry.objects.create(section=education, title="BSc")
    return {"experience": experience, "education": education, "job": job}


def test_public_resume_shows_visible_sections_in_order(api_client, resume):
    response = api_client.get("/api/resume")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["basic_info"]["full_name"] == "Ada Lovelace"
    assert [s["title"] for s in data["sections"]] == ["Experience", "Education"]
    bullets = data["sections"][0]["entries"][0]["bullets"]
    assert [b["content"] for b in bullets] == ["First", "Second"]


def test_public_resume_when_empty(api_client):
    data = api_client.get("/api/resume").json()["data"]
    assert data == {"basic_info": None, "sections": []}


def test_basic_info_put_creates_then_updates(admin_client):
    response = admin_client.put("/api/admin/resume/basic-info", {"full_name": "Grace Hopper"}, format="json")
    assert response.status_code == 200
    first_id = response.json()["id"]

    response = admin_client.put(
        "/api/admin/resume/basic-info", {"full_name": "Grace Hopper", "location": "Arlington"}, format="json"
    )
    assert response.json()["id"] == first_id
    assert ResumeBasicInfo.objects.count() == 1
    assert ResumeBasicInfo.objects.get().location == "Arlington"
    assert admin_client.get("/api/admin/resume/basic-info").json()["full_name"] == "Grace Hopper"


def test_basic_info_is_singleton(resume):
    with pytest.raises(ValidationError):
        ResumeBasicInfo.objects.create(full_name="Someone Else")


def test_section_entry_and_bullet_append(admin_client, resume):
    response = admin_client.post("/api/admin/resume/sections", {"title": "Skills"}, format="json")
    assert response.status_code == 201
    assert response.json()["display_order"] == 3

    response = admin_client.post(
        "/api/admin/resume/entries", {"section_id": resume["experience"].pk, "title": "Intern"}, format="json"
    )
    assert response.status_code == 201
    assert response.json()["display_order"] == 1

    response = admin_client.post(
        "/api/admin/resume/bullets", {"entry_id": resume["job"].pk, "content": "Third"}, format="json"
    )
    assert response.status_code == 201
    assert response.json()["display_order"] == 2


def test_current_entry_drops_end_date(admin_client, resume):
    response = admin_client.post(
        "/api/admin/resume/entries",
        {
            "section_id": resume["experience"].pk,
            "title": "Lead",
            "start_date": "2024-01-01",
            "end_date": "2024-06-01",
            "is_current": True,
        },
        format="json",
    )
    assert response.status_code == 201
    assert response.json()["end_date"] is None


def test_reorder_sections(admin_client, resume):
    response = admin_client.put(
        "/api/admin/reorder",
        {
            "type": "sections",
            "items": [
                {"id": resume["education"].pk, "display_order": 0},
                {"id": resume["experience"].pk, "display_order": 1},
            ],
        },
        format="json",
    )
    assert response.status_code == 200
    titles = [s["title"] for s in admin_client.get("/api/resume").json()["data"]["sections"]]
    assert titles == ["Education", "Experience"]


def test_entries_filter_by_section(admin_client, resume):
    response = admin_client.get("/api/admin/resume/entries", {"section": resume["education"].pk})
    assert [e["title"] for e in response.json()] == ["BSc"]
