"""
Tests for management commands
"""
import io
import json
from unittest import mock

import pytest
from django.core.management import CommandError, call_command
from django.db import connection

from showcase.models import ComponentType, Project, ProjectComponent, ResumeBasicInfo, Tech

pytestmark = pytest.mark.django_db


def run(*args, **kwargs):
    out, err = io.StringIO(), io.StringIO()
    call_command(*args, stdout=out, stderr=err, **kwargs)
    return out.getvalue(), err.getvalue()


def test_render_project_from_database(chess_project):
    ProjectComponent.objects.create(
        project=chess_project, component_type=ComponentType.VIDEO, component_data={"video_url": "x"}, display_order=3
    )
    out, err = run("render_project", str(chess_project.pk))
    payload = json.loads(out)
    assert payload["header"]["title"] == "Chess AI!"
    assert [b["block"] for b in payload["blocks"]] == ["tech_stack", "text", "error"]
    assert "1 component(s) rendered as errors" in err


def test_render_project_missing():
    with pytest.raises(CommandError, match="does not exist"):
        run("render_project", "404")


def test_render_project_from_api(wire_project):
    wire_project["components"] = [{"id": 1, "component_type": "text", "component_data": '{"text": "remote"}'}]
    with mock.patch("showcase.management.commands.render_project.PortfolioClient") as client_cls:
        client_cls.return_value.get_project.return_value = wire_project
        client_cls.return_value.list_projects.return_value = []
        out, _ = run("render_project", "1", api_url="http://api.test/api")
    client_cls.assert_called_once_with("http://api.test/api")
    blocks = json.loads(out)["blocks"]
    assert blocks[0]["props"]["text"] == "remote"


def test_seed_data_is_idempotent():
    run("seed_data")
    run("seed_data")
    assert Project.objects.count() == 3
    assert Tech.objects.filter(name="Rust").count() == 1
    assert ResumeBasicInfo.objects.count() == 1
    chess = Project.objects.get(name="Chess AI")
    assert chess.components.count() == 7
    assert list(chess.components.values_list("display_order", flat=True)) == list(range(7))


def test_seeded_project_renders_cleanly():
    run("seed_data")
    chess = Project.objects.get(name="Chess AI")
    out, err = run("render_project", str(chess.pk))
    blocks = json.loads(out)["blocks"]
    assert not any(b["block"] == "error" for b in blocks)
    assert err == ""


def test_migrations_match_models():
    # Exits non-zero when the models have changes without a migration
    out, _ = run("makemigrations", "showcase", "--check", "--dry-run")
    assert "No changes detected" in out


def test_order_constraints_exist_in_migrated_schema():
    with connection.cursor() as cursor:
        constraints = connection.introspection.get_constraints(cursor, ProjectComponent._meta.db_table)
    unique_columns = [c["columns"] for c in constraints.values() if c["unique"] and not c["primary_key"]]
    assert ["project_id", "display_order"] in unique_columns


def test_print_storage_info():
    out, _ = run("print_storage_info")
    assert "FileSystemStorage" in out
    assert "(not configured)" in out
