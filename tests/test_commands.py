"""Tests for the project, group and file-editing commands."""

import base64
import io
import json
from urllib.parse import parse_qs, urlparse

import pytest
import requests
import responses

from conftest import MOCK_API_URL, make_args

from glctl.commands import DeleteProjectCommand, EditFileCommand, GetGroupsCommand, GetProjectsCommand
from glctl.models import UsageError


def run(cmd_cls, client, args) -> str:
    out = io.StringIO()
    cmd = cmd_cls(client, args, out=out)
    cmd.validate()
    cmd.run()
    return out.getvalue()


def group_payload(i: int) -> dict:
    return {"id": i, "name": f"team-{i}", "full_path": f"org/team-{i}", "web_url": f"https://x/org/team-{i}"}


class TestGetGroups:
    @responses.activate
    def test_group_by_id(self, mock_client, sample_group):
        responses.add(responses.GET, f"{MOCK_API_URL}/groups/456", json=sample_group)

        output = run(GetGroupsCommand, mock_client, make_args(group="456", all_available=False, search=None))

        assert "myorg" in output.splitlines()[1]
        assert len(responses.calls) == 1

    @responses.activate
    def test_list_groups_with_page(self, mock_client):
        responses.add(responses.GET, f"{MOCK_API_URL}/groups", json=[group_payload(1)])

        args = make_args(group=None, all_available=False, search=None, page=2, per_page=10)
        run(GetGroupsCommand, mock_client, args)

        params = parse_qs(urlparse(responses.calls[0].request.url).query)
        assert params["page"] == ["2"]
        assert params["per_page"] == ["10"]

    @responses.activate
    def test_list_all_groups(self, mock_client):
        responses.add(
            responses.GET,
            f"{MOCK_API_URL}/groups",
            json=[group_payload(i) for i in range(100)],
            headers={"X-Next-Page": "2"},
        )
        responses.add(
            responses.GET,
            f"{MOCK_API_URL}/groups",
            json=[group_payload(i) for i in range(100, 105)],
            headers={"X-Next-Page": ""},
        )

        args = make_args(group=None, all_available=True, search=None, all=True, output="path")
        output = run(GetGroupsCommand, mock_client, args)

        assert len(output.splitlines()) == 105
        assert len(responses.calls) == 2

    @responses.activate
    def test_desc_sort(self, mock_client):
        responses.add(responses.GET, f"{MOCK_API_URL}/groups", json=[])

        run(GetGroupsCommand, mock_client, make_args(group=None, all_available=False, search=None, sort="desc"))

        params = parse_qs(urlparse(responses.calls[0].request.url).query)
        assert params["sort"] == ["desc"]


class TestGetProjects:
    @responses.activate
    def test_project_by_path(self, mock_client, sample_project):
        responses.add(responses.GET, f"{MOCK_API_URL}/projects/123", json=sample_project)

        output = run(GetProjectsCommand, mock_client, make_args(project="123", owned=False, search=None))

        row = output.splitlines()[1].split()
        assert row[:3] == ["123", "myorg/demo", "main"]

    @responses.activate
    def test_list_owned_projects(self, mock_client, sample_project):
        responses.add(responses.GET, f"{MOCK_API_URL}/projects", json=[sample_project])

        args = make_args(project=None, owned=True, search="demo", output="path")
        output = run(GetProjectsCommand, mock_client, args)

        params = parse_qs(urlparse(responses.calls[0].request.url).query)
        assert params["owned"] == ["true"]
        assert params["search"] == ["demo"]
        assert output == "myorg/demo\n"


class TestDeleteProject:
    @responses.activate
    def test_delete_by_path(self, mock_client, sample_project):
        responses.add(responses.GET, f"{MOCK_API_URL}/projects/123", json=sample_project)
        responses.add(responses.DELETE, f"{MOCK_API_URL}/projects/123", status=202, json={"message": "202 Accepted"})

        output = run(DeleteProjectCommand, mock_client, make_args(project="123"))

        assert output == "project (123) with id (123) has been deleted\n"
        assert [c.request.method for c in responses.calls] == ["GET", "DELETE"]

    @responses.activate
    def test_dry_run_does_not_delete(self, dry_run_client, sample_project):
        responses.add(responses.GET, f"{MOCK_API_URL}/projects/123", json=sample_project)

        output = run(DeleteProjectCommand, dry_run_client, make_args(project="123"))

        assert "would be deleted" in output
        assert [c.request.method for c in responses.calls] == ["GET"]

    @responses.activate
    def test_missing_project_propagates(self, mock_client):
        responses.add(responses.GET, f"{MOCK_API_URL}/projects/999", status=404)

        with pytest.raises(requests.HTTPError):
            run(DeleteProjectCommand, mock_client, make_args(project="999"))

    @pytest.mark.parametrize("project", [None, "", "   "])
    @responses.activate
    def test_blank_project_is_usage_error(self, mock_client, project):
        cmd = DeleteProjectCommand(mock_client, make_args(project=project), out=io.StringIO())

        with pytest.raises(UsageError):
            cmd.validate()
        assert len(responses.calls) == 0


class TestEditFile:
    FILE_URL = f"{MOCK_API_URL}/projects/123/repository/files/README.md"

    @responses.activate
    def test_updates_file_from_local_source(self, mock_client, tmp_path):
        source = tmp_path / "README.md"
        source.write_text("# New\n", encoding="utf-8")
        responses.add(responses.GET, self.FILE_URL, json={"file_path": "README.md", "last_commit_id": "abc123"})
        responses.add(responses.PUT, self.FILE_URL, json={"file_path": "README.md", "branch": "develop"})

        args = make_args(project="123", path="README.md", ref="develop", source=str(source), message=None)
        output = run(EditFileCommand, mock_client, args)

        assert output == "file (README.md) updated on branch (develop)\n"
        put = responses.calls[1].request
        assert put.method == "PUT"
        assert b'"content": "# New\\n"' in put.body
        assert b'"commit_message": "Update README.md"' in put.body
        assert b'"last_commit_id": "abc123"' in put.body

    @responses.activate
    def test_uses_default_branch(self, mock_client, sample_project, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))
        responses.add(responses.GET, f"{MOCK_API_URL}/projects/123", json=sample_project)
        responses.add(responses.GET, self.FILE_URL, json={"file_path": "README.md", "last_commit_id": "abc123"})
        responses.add(responses.PUT, self.FILE_URL, json={"file_path": "README.md", "branch": "main"})

        args = make_args(project="123", path="README.md", ref="", source="-", message="docs")
        output = run(EditFileCommand, mock_client, args)

        assert output == "file (README.md) updated on branch (main)\n"
        assert b'"content": "from stdin"' in responses.calls[2].request.body

    @responses.activate
    def test_binary_source_is_sent_as_base64(self, mock_client, tmp_path):
        png = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff"
        source = tmp_path / "logo.png"
        source.write_bytes(png)
        url = f"{MOCK_API_URL}/projects/123/repository/files/logo.png"
        responses.add(responses.GET, url, json={"file_path": "logo.png", "last_commit_id": "abc123"})
        responses.add(responses.PUT, url, json={"file_path": "logo.png", "branch": "main"})

        args = make_args(project="123", path="logo.png", ref="main", source=str(source), message=None)
        output = run(EditFileCommand, mock_client, args)

        assert output == "file (logo.png) updated on branch (main)\n"
        body = json.loads(responses.calls[1].request.body)
        assert body["encoding"] == "base64"
        assert base64.b64decode(body["content"]) == png

    @responses.activate
    def test_text_source_has_no_encoding(self, mock_client, tmp_path):
        source = tmp_path / "README.md"
        source.write_text("caf\u00e9\n", encoding="utf-8")
        responses.add(responses.GET, self.FILE_URL, json={"file_path": "README.md", "last_commit_id": "abc123"})
        responses.add(responses.PUT, self.FILE_URL, json={"file_path": "README.md", "branch": "main"})

        args = make_args(project="123", path="README.md", ref="main", source=str(source), message=None)
        run(EditFileCommand, mock_client, args)

        body = json.loads(responses.calls[1].request.body)
        assert body["content"] == "caf\u00e9\n"
        assert "encoding" not in body

    def test_path_is_required(self, mock_client):
        cmd = EditFileCommand(
            mock_client, make_args(project="123", path=None, ref="", source="-", message=None), out=io.StringIO()
        )
        with pytest.raises(UsageError, match="file path"):
            cmd.validate()

    def test_local_source_must_exist(self, mock_client, tmp_path):
        args = make_args(project="123", path="README.md", ref="", source=str(tmp_path / "missing"), message=None)
        cmd = EditFileCommand(mock_client, args, out=io.StringIO())
        with pytest.raises(UsageError, match="local file not found"):
            cmd.validate()
