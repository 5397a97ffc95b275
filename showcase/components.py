"""Project detail composition.

A project's detail page is an ordered list of components. Each component is
a ``(component_type, component_data)`` pair where the shape of the data
depends entirely on the type. ``render_component`` turns one stored
component plus its owning project into a :class:`RenderResult`, a plain
description of the block for the presentation layer to draw.

Everything here works on wire-shaped dicts (what ``ProjectDetailSerializer``
produces or what the read API returns) and does no I/O. Related project
summaries and the diagram renderer are handed in by the caller.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, assert_never

from django.conf import settings
from rest_framework import serializers

from .diagrams import validate_mermaid
from .models import ComponentType

logger = logging.getLogger(__name__)

ERROR_BLOCK = "error"

YOUTUBE_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/shorts/([^&\n?#]+)"),
)


class MalformedComponentData(ValueError):
    """component_data is missing a required field or has the wrong shape."""


@dataclass(frozen=True)
class RenderResult:
    block: str
    component_id: Optional[int] = None
    props: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.block == ERROR_BLOCK

    def as_dict(self) -> Dict[str, Any]:
        return {
            "block": self.block,
            "component_id": self.component_id,
            "props": self.props,
            "error": self.error,
        }


# Per-kind data contracts


def _optional_text(**kwargs):
    return serializers.CharField(required=False, allow_blank=True, allow_null=True, **kwargs)


class TitleData(serializers.Serializer):
    title = serializers.CharField()
    subtitle = _optional_text()


class TextData(serializers.Serializer):
    text = serializers.CharField(trim_whitespace=False)


class TextWithTitleData(serializers.Serializer):
    title = serializers.CharField()
    text = serializers.CharField(trim_whitespace=False)


class TextWithImageData(serializers.Serializer):
    text = serializers.CharField(trim_whitespace=False)
    image_url = serializers.CharField()
    title = _optional_text()
    caption = _optional_text()
    image_position = serializers.ChoiceField(choices=["left", "right"], required=False, default="left")
    media_type = serializers.ChoiceField(choices=["image", "video"], required=False, default="image")


class SingleImageData(serializers.Serializer):
    image_url = serializers.CharField()
    caption = _optional_text()


class CarouselImage(serializers.Serializer):
    image_url = serializers.CharField()
    caption = _optional_text()


class ImageCarouselData(serializers.Serializer):
    images = CarouselImage(many=True, required=False)


class VideoData(serializers.Serializer):
    video_url = serializers.CharField()
    caption = _optional_text()


class RepositoryLinksData(serializers.Serializer):
    github_url = _optional_text()
    live_url = _optional_text()


class RelatedProjectsData(serializers.Serializer):
    project_ids = serializers.ListField(child=serializers.IntegerField())


class MermaidData(serializers.Serializer):
    diagram_code = serializers.CharField(trim_whitespace=False)
    title = _optional_text()
    caption = _optional_text()


def _flatten_errors(errors) -> List[str]:
    if isinstance(errors, dict):
        out = []
        for key, value in errors.items():
            out.extend(f"{key}: {msg}" for msg in _flatten_errors(value))
        return out
    if isinstance(errors, list):
        out = []
        for value in errors:
            out.extend(_flatten_errors(value))
        return out
    return [str(errors)]


def _validated(contract, data: Mapping[str, Any]) -> Dict[str, Any]:
    s = contract(data=data)
    if not s.is_valid():
        raise MalformedComponentData("; ".join(_flatten_errors(s.errors)))
    # Nested serializers hand back OrderedDicts; round-trip to plain values
    return json.loads(json.dumps(s.validated_data))


def parse_component_data(raw: Any) -> Dict[str, Any]:
    """Normalize component_data as it arrives over the wire.

    The read API may send the data as an object or as JSON text; both end up
    as a dict. ``None`` counts as an empty object.
    """
    if raw is None:
        return {}
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw) if raw else {}
        except json.JSONDecodeError as exc:
            raise MalformedComponentData(f"component_data is not valid JSON: {exc.msg}") from exc
    if not isinstance(raw, Mapping):
        raise MalformedComponentData("component_data must be a JSON object")
    return dict(raw)


def youtube_video_id(url: str) -> Optional[str]:
    for pattern in YOUTUBE_PATTERNS:
        match = pattern.search(url or "")
        if match:
            return match.group(1)
    return None


def _present(data: Mapping[str, Any], *names: str) -> Dict[str, Any]:
    return {name: data.get(name) or None for name in names}


def _sorted_tech(project: Mapping[str, Any]) -> List[Dict[str, Any]]:
    stack = project.get("tech_stack") or []
    return sorted((dict(t) for t in stack), key=lambda t: t.get("display_order") or 0)


def _resolve_related(ids: Iterable[int], related: Optional[Mapping[int, Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    related = related or {}
    resolved = []
    for pid in ids:
        summary = related.get(pid)
        if summary is None:
            logger.debug("Related project %s not found; skipping", pid)
            continue
        resolved.append({
            "id": pid,
            "name": summary.get("name"),
            "subheading": summary.get("subheading"),
            "poster_image_url": summary.get("poster_image_url"),
        })
    return resolved


def _error(component_id, kind: str, message: str) -> RenderResult:
    return RenderResult(block=ERROR_BLOCK, component_id=component_id, props={"component_type": kind}, error=message)


def render_component(
    component: Mapping[str, Any],
    project: Mapping[str, Any],
    related: Optional[Mapping[int, Mapping[str, Any]]] = None,
    diagram_renderer: Optional[Callable[[str], str]] = None,
) -> Optional[RenderResult]:
    """Project one stored component into a render description.

    Returns ``None`` for ``title`` components (drawn in the page header),
    for unknown component types and for kinds with nothing to show.
    Malformed data and diagram failures come back as an error block for this
    component only.
    """
    component_id = component.get("id")
    raw_type = component.get("component_type")
    try:
        kind = ComponentType(raw_type)
    except ValueError:
        logger.warning("Unknown component type: %s (component %s)", raw_type, component_id)
        return None

    try:
        data = parse_component_data(component.get("component_data"))
        return _dispatch(kind, component_id, data, project, related, diagram_renderer or validate_mermaid)
    except MalformedComponentData as exc:
        logger.info("Malformed %s component %s: %s", kind.value, component_id, exc)
        return _error(component_id, kind.value, f"Invalid {kind.label.lower()} data: {exc}")


def _dispatch(kind, component_id, data, project, related, diagram_renderer) -> Optional[RenderResult]:
    color = project.get("color") or settings.DEFAULT_PROJECT_COLOR

    def result(**props) -> RenderResult:
        return RenderResult(block=kind.value, component_id=component_id, props=props)

    match kind:
        case ComponentType.TITLE:
            return None
        case ComponentType.ABOUT | ComponentType.TEXT:
            v = _validated(TextData, data)
            return result(text=v["text"], color=color)
        case ComponentType.TEXT_WITH_TITLE:
            v = _validated(TextWithTitleData, data)
            return result(title=v["title"], text=v["text"], color=color)
        case ComponentType.TEXT_WITH_IMAGE | ComponentType.TEXT_IMAGE_TITLE:
            v = _validated(TextWithImageData, data)
            return result(
                text=v["text"],
                image_url=v["image_url"],
                image_position=v["image_position"],
                media_type=v["media_type"],
                autoplay_in_view=v["media_type"] == "video",
                color=color,
                **_present(v, "title", "caption"),
            )
        case ComponentType.SINGLE_IMAGE:
            v = _validated(SingleImageData, data)
            return result(image_url=v["image_url"], caption=v.get("caption") or None)
        case ComponentType.IMAGE_CAROUSEL:
            v = _validated(ImageCarouselData, data)
            images = [{"image_url": i["image_url"], "caption": i.get("caption") or None} for i in v.get("images") or []]
            if not images:
                return None
            return result(images=images, color=color)
        case ComponentType.VIDEO:
            v = _validated(VideoData, data)
            video_id = youtube_video_id(v["video_url"])
            if not video_id:
                return _error(component_id, kind.value, "Invalid video URL")
            return result(
                video_id=video_id,
                embed_url=f"https://www.youtube.com/embed/{video_id}",
                caption=v.get("caption") or None,
            )
        case ComponentType.TECH_STACK:
            stack = _sorted_tech(project)
            if not stack:
                return None
            return result(tech_stack=stack)
        case ComponentType.REPOSITORY_LINKS:
            v = _validated(RepositoryLinksData, data)
            links = [{"kind": k, "url": v[f"{k}_url"]} for k in ("github", "live") if v.get(f"{k}_url")]
            return result(links=links, color=color)
        case ComponentType.RELATED_PROJECTS:
            v = _validated(RelatedProjectsData, data)
            if not v["project_ids"]:
                return None
            return result(projects=_resolve_related(v["project_ids"], related), color=color)
        case ComponentType.MERMAID:
            v = _validated(MermaidData, data)
            try:
                rendered = diagram_renderer(v["diagram_code"])
            except Exception as exc:  # noqa: BLE001
                logger.info("Diagram render failed for component %s: %s", component_id, exc)
                return _error(component_id, kind.value, f"Unable to render diagram: {exc}")
            return result(diagram=rendered, **_present(v, "title", "caption"))
        case _:
            assert_never(kind)


def render_components(
    components: Iterable[Mapping[str, Any]],
    project: Mapping[str, Any],
    related: Optional[Mapping[int, Mapping[str, Any]]] = None,
    diagram_renderer: Optional[Callable[[str], str]] = None,
) -> List[RenderResult]:
    """Render a project's components in display_order, skipping empty ones.

    A failure in one component becomes an error block in its slot; the
    others still render.
    """
    ordered = sorted(components, key=lambda c: c.get("display_order") or 0)
    blocks = []
    for component in ordered:
        try:
            block = render_component(component, project, related=related, diagram_renderer=diagram_renderer)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Component %s failed to render", component.get("id"))
            block = _error(component.get("id"), str(component.get("component_type")), str(exc))
        if block is not None:
            blocks.append(block)
    return blocks


def resolve_header(project: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    """Title and subtitle for the page header; the title component wins over project fields."""
    title_data: Dict[str, Any] = {}
    for component in project.get("components") or []:
        if component.get("component_type") == ComponentType.TITLE.value:
            try:
                title_data = _validated(TitleData, parse_component_data(component.get("component_data")))
            except MalformedComponentData:
                logger.info("Ignoring malformed title component %s", component.get("id"))
            break
    return {
        "title": title_data.get("title") or project.get("name"),
        "subtitle": title_data.get("subtitle") or project.get("subheading"),
    }
