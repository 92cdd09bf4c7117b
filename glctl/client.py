"""GitLab API client for projects, groups and repository files."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

import requests

from glctl.models import API_V4, GlctlError, Group, Page, Pagination, Project, TreeEntry


def project_ref(identifier: str | int) -> str:
    """
    Turn a project or group identifier into the path segment the API expects.

    Accepts a numeric id, a ``namespace/path`` or a full GitLab web URL.
    Paths are URL-encoded so nested namespaces survive as a single segment.
    """
    value = str(identifier).strip()
    if value.isdigit():
        return value
    return urllib.parse.quote(extract_path_from_url(value), safe="")


def extract_path_from_url(url: str) -> str:
    """Extract the namespace/project path from a GitLab URL."""
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme and parsed.netloc:
        # Full URL: https://gitlab.com/myorg/myteam/myproject
        path = parsed.path.strip("/")
        for suffix in ("/-/", "/-", ".git"):
            if suffix in path:
                path = path[: path.index(suffix)]
        return path
    # Bare path: myorg/myteam/myproject
    return url.strip("/")


def _has_more(resp: requests.Response, items: list) -> bool:
    next_page = resp.headers.get("x-next-page")
    if next_page is None:
        # No pagination headers (e.g. some proxies strip them): an empty page ends the walk
        return bool(items)
    return bool(next_page.strip())


class GitLabClient:
    """Thin wrapper around GitLab REST API v4."""

    def __init__(self, base_url: str, token: str, dry_run: bool = False):
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}{API_V4}"
        self.session = requests.Session()
        self.session.headers.update({"PRIVATE-TOKEN": token})
        self.dry_run = dry_run
        self.logger = logging.getLogger("glctl")

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{self.api_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('params', '')}")
        resp = self.session.request(method, url, **kwargs)
        if resp.status_code >= 400:
            self.logger.error(f"API error {resp.status_code}: {resp.text[:500]}")
        resp.raise_for_status()
        return resp

    def get(self, endpoint: str, params: dict | None = None) -> Any:
        return self._request("GET", endpoint, params=params).json()

    def put(self, endpoint: str, data: dict | None = None) -> Any:
        return self._request("PUT", endpoint, json=data).json()

    def delete(self, endpoint: str, params: dict | None = None) -> requests.Response:
        return self._request("DELETE", endpoint, params=params)

    def get_page(self, endpoint: str, pagination: Pagination, params: dict | None = None) -> Page[dict]:
        """Fetch exactly one page of a paginated endpoint."""
        query = dict(params or {})
        query.update(pagination.to_params())
        resp = self._request("GET", endpoint, params=query)
        items = resp.json()
        return Page(items=items, number=pagination.page, has_more=_has_more(resp, items))

    # -- Repository files --

    def list_tree(
        self,
        project: str,
        pagination: Pagination,
        path: str | None = None,
        ref: str | None = None,
        recursive: bool = True,
    ) -> Page[TreeEntry]:
        params: dict[str, Any] = {"recursive": str(recursive).lower()}
        if path:
            params["path"] = path
        if ref:
            params["ref"] = ref
        page = self.get_page(f"/projects/{project_ref(project)}/repository/tree", pagination, params)
        return Page(
            items=[TreeEntry.from_api(item) for item in page.items],
            number=page.number,
            has_more=page.has_more,
        )

    def get_raw_file(self, project: str, path: str, ref: str | None = None) -> bytes:
        """Return a file's raw bytes. Without a ref GitLab serves the default branch (HEAD)."""
        encoded_path = urllib.parse.quote(path.strip("/"), safe="")
        params = {"ref": ref} if ref else None
        endpoint = f"/projects/{project_ref(project)}/repository/files/{encoded_path}/raw"
        return self._request("GET", endpoint, params=params).content

    def get_file(self, project: str, path: str, ref: str) -> dict:
        """Get file metadata (including ``last_commit_id``) at a ref."""
        encoded_path = urllib.parse.quote(path.strip("/"), safe="")
        return self.get(f"/projects/{project_ref(project)}/repository/files/{encoded_path}", params={"ref": ref})

    def update_file(
        self,
        project: str,
        path: str,
        branch: str,
        content: str,
        commit_message: str,
        last_commit_id: str | None = None,
        encoding: str | None = None,
    ) -> dict | None:
        """Commit new file content. Pass ``encoding="base64"`` when ``content`` is base64 text."""
        encoded_path = urllib.parse.quote(path.strip("/"), safe="")
        endpoint = f"/projects/{project_ref(project)}/repository/files/{encoded_path}"
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] would update {path} on branch {branch}")
            return None
        data = {"branch": branch, "content": content, "commit_message": commit_message}
        if last_commit_id:
            data["last_commit_id"] = last_commit_id
        if encoding:
            data["encoding"] = encoding
        return self.put(endpoint, data=data)

    # -- Projects --

    def get_project(self, project: str) -> Project:
        return Project.from_api(self.get(f"/projects/{project_ref(project)}"))

    def default_branch(self, project: str) -> str:
        branch = self.get_project(project).default_branch
        if not branch:
            raise GlctlError(f"project {project} has no default branch (empty repository?)")
        return branch

    def list_projects(self, pagination: Pagination, owned: bool = False, search: str | None = None) -> Page[Project]:
        params: dict[str, Any] = {}
        if owned:
            params["owned"] = "true"
        if search:
            params["search"] = search
        page = self.get_page("/projects", pagination, params)
        return Page(items=[Project.from_api(p) for p in page.items], number=page.number, has_more=page.has_more)

    def delete_project(self, project_id: int) -> None:
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] would delete project id={project_id}")
            return
        self.delete(f"/projects/{project_id}")

    # -- Groups --

    def get_group(self, group: str) -> Group:
        return Group.from_api(self.get(f"/groups/{project_ref(group)}"))

    def list_groups(
        self, pagination: Pagination, all_available: bool = False, search: str | None = None
    ) -> Page[Group]:
        params: dict[str, Any] = {}
        if all_available:
            params["all_available"] = "true"
        if search:
            params["search"] = search
        page = self.get_page("/groups", pagination, params)
        return Page(items=[Group.from_api(g) for g in page.items], number=page.number, has_more=page.has_more)
