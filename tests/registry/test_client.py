"""Tests for ApicurioRegistryClient over a mocked requests session."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from protoreg.errors import RegistryNotReadyError, RegistryRequestError
from protoreg.registry.client import ApicurioRegistryClient
from protoreg.registry.models import (
    ArtifactMetadata,
    CreateArtifactRequest,
    CreateContentRequest,
    CreateVersionRequest,
    VersionMetadata,
)

BASE = "http://registry.test/apis/registry/v3"


def _response(status_code: int, payload: Any = None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if payload is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = payload
    return response


def _request() -> CreateArtifactRequest:
    return CreateArtifactRequest(
        artifact_id="base",
        first_version=CreateVersionRequest(content=CreateContentRequest(content="syntax")),
    )


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session: MagicMock) -> ApicurioRegistryClient:
    return ApicurioRegistryClient(BASE + "/", session=session, timeout=3.0)


class TestCreateArtifact:
    def test_posts_wire_body(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        """create_artifact POSTs the camelCase body to the group's artifacts URL."""
        session.request.return_value = _response(
            200,
            {"artifact": {"artifactId": "base", "groupId": "default"}, "version": {"version": "1"}},
        )
        meta = client.create_artifact("default", _request())

        assert isinstance(meta, ArtifactMetadata)
        assert meta.artifact_id == "base"
        method, url = session.request.call_args.args
        assert method == "POST"
        assert url == f"{BASE}/groups/default/artifacts"
        assert session.request.call_args.kwargs["timeout"] == 3.0
        body = session.request.call_args.kwargs["json"]
        assert body["artifactId"] == "base"
        assert body["artifactType"] == "PROTOBUF"
        assert body["firstVersion"]["content"]["references"] == []

    def test_unwrapped_response(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        """A flat metadata response is accepted too."""
        session.request.return_value = _response(200, {"artifactId": "base"})
        assert client.create_artifact("default", _request()).artifact_id == "base"

    def test_conflict(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        """409 surfaces as a RegistryRequestError with is_conflict set."""
        session.request.return_value = _response(409, text="artifact already exists")
        with pytest.raises(RegistryRequestError) as exc_info:
            client.create_artifact("default", _request())
        assert exc_info.value.is_conflict
        assert exc_info.value.status_code == 409

    def test_server_error(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        session.request.return_value = _response(500, text="boom")
        with pytest.raises(RegistryRequestError) as exc_info:
            client.create_artifact("default", _request())
        assert not exc_info.value.is_conflict
        assert "boom" in str(exc_info.value)

    def test_transport_error(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        """Connection failures have no status code and keep the cause."""
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(RegistryRequestError) as exc_info:
            client.create_artifact("default", _request())
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.cause, requests.ConnectionError)

    def test_non_json_body(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        session.request.return_value = _response(200, None, text="<html>")
        with pytest.raises(RegistryRequestError):
            client.create_artifact("default", _request())


class TestMetadataLookups:
    def test_get_artifact_metadata(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        session.request.return_value = _response(200, {"artifactId": "common-base", "groupId": "default"})
        meta = client.get_artifact_metadata("default", "common-base")
        assert meta.artifact_id == "common-base"
        assert session.request.call_args.args == ("GET", f"{BASE}/groups/default/artifacts/common-base")

    def test_get_artifact_metadata_not_found(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        session.request.return_value = _response(404, text="not found")
        with pytest.raises(RegistryRequestError) as exc_info:
            client.get_artifact_metadata("default", "missing")
        assert exc_info.value.status_code == 404

    def test_get_artifact_version_metadata(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        session.request.return_value = _response(200, {"artifactId": "base", "version": "1"})
        meta = client.get_artifact_version_metadata("default", "base", "1")
        assert isinstance(meta, VersionMetadata)
        assert session.request.call_args.args == ("GET", f"{BASE}/groups/default/artifacts/base/versions/1")

    def test_ids_are_url_quoted(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        session.request.return_value = _response(200, {"artifactId": "a b"})
        client.get_artifact_metadata("my group", "a b")
        assert session.request.call_args.args[1] == f"{BASE}/groups/my%20group/artifacts/a%20b"


class TestWaitUntilReady:
    def test_ready_first_try(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        session.get.return_value = _response(200, {})
        sleeps: list[float] = []
        client.wait_until_ready("http://registry.test/health/ready", sleep=sleeps.append)
        assert sleeps == []

    def test_ready_after_retries(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        """Connection errors and non-200s are retried."""
        session.get.side_effect = [
            requests.ConnectionError("down"),
            _response(503),
            _response(200, {}),
        ]
        sleeps: list[float] = []
        client.wait_until_ready("http://registry.test/health/ready", retries=5, interval=0.5, sleep=sleeps.append)
        assert sleeps == [0.5, 0.5]

    def test_never_ready(self, client: ApicurioRegistryClient, session: MagicMock) -> None:
        session.get.return_value = _response(503)
        sleeps: list[float] = []
        with pytest.raises(RegistryNotReadyError) as exc_info:
            client.wait_until_ready("http://registry.test/health/ready", retries=3, interval=1.0, sleep=sleeps.append)
        assert exc_info.value.details["attempts"] == 3
        assert sleeps == [1.0, 1.0]
