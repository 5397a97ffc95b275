"""Minimal client for the public read API.

One request per call and no retries; callers decide what to do with an
``APIError``.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from django.conf import settings

from .components import MalformedComponentData, parse_component_data

logger = logging.getLogger(__name__)


class APIError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class NotFound(APIError):
    pass


class PortfolioClient:
    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.PORTFOLIO_API_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.PORTFOLIO_API_TIMEOUT
        self.session.headers.setdefault("Accept", "application/json")
        self.session.headers.setdefault("User-Agent", "folio-site/1.0")

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise APIError(f"request to {url} failed: {exc}") from exc
        if r.status_code == 404:
            raise NotFound(f"{url} not found", status=404)
        if not r.ok:
            raise APIError(f"{url} returned {r.status_code}: {r.text[:300]}", status=r.status_code)
        try:
            body = r.json()
        except ValueError as exc:
            raise APIError(f"{url} returned invalid JSON", status=r.status_code) from exc
        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise APIError(f"API returned unsuccessful response: {error or 'unknown error'}", status=r.status_code)
        return body.get("data") or {}

    def list_projects(self, name: Optional[str] = None, tag: Optional[str] = None, is_pinned: Optional[bool] = None) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if name:
            params["name"] = name
        if tag:
            params["tag"] = tag
        if is_pinned is not None:
            params["isPinned"] = "true" if is_pinned else "false"
        return self._get("projects", params=params or None).get("projects") or []

    def get_project(self, project_id: int) -> Dict[str, Any]:
        project = self._get(f"projects/{project_id}").get("project")
        if not project:
            raise NotFound(f"project {project_id} missing from response", status=200)
        for component in project.get("components") or []:
            try:
                component["component_data"] = parse_component_data(component.get("component_data"))
            except MalformedComponentData:
                # Left as-is; render_component reports it as an inline error
                logger.info("Component %s has unparseable data", component.get("id"))
        return project

    def get_resume(self) -> Dict[str, Any]:
        data = self._get("resume")
        return {"basic_info": data.get("basic_info"), "sections": data.get("sections") or []}
