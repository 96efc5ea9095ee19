"""
HTTP API tests for the code-generation endpoint.

Covers:
  - Successful streamed responses and headers
  - Schema validation (422)
  - Failure mapping (500) for image fetch and backend errors
  - Credential fallback observed end-to-end through the endpoint
  - Discovery endpoints
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from screenshot_to_code.api import http_api
from screenshot_to_code.core import engine
from screenshot_to_code.image.client import ImageFetchError, ImagePayload
from screenshot_to_code.llm.errors import BackendError, QuotaExceededError


client = TestClient(http_api.app)

VALID_BODY = {"model": "gemini", "imageUrl": "https://example.com/shot.png"}


@pytest.fixture
def keys(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g1")
    monkeypatch.setenv("GEMINI_API_KEY_2", "g2")


class TestGenerateCodeSuccess:
    def test_streams_code_with_no_cache(self):
        with patch.object(http_api, "generate_component", AsyncMock(return_value="export default function A() {}")):
            response = client.post("/api/generateCode", json=VALID_BODY)

        assert response.status_code == 200
        assert response.text == "export default function A() {}"
        assert response.headers["cache-control"] == "no-cache"
        assert response.headers["content-type"].startswith("text/plain")

    def test_body_never_contains_fences(self, keys):
        gemini_reply = "```tsx\nimport React from 'react'\n```"

        with patch.object(engine, "fetch_image", AsyncMock(return_value=ImagePayload(b"img"))), \
                patch.object(engine.service.client, "send_gemini_request", side_effect=["description", gemini_reply]):
            response = client.post("/api/generateCode", json=VALID_BODY)

        assert response.status_code == 200
        assert "```" not in response.text
        assert response.text == "import React from 'react'"

    def test_large_code_streamed_intact(self):
        code = "x" * 10_000
        with patch.object(http_api, "generate_component", AsyncMock(return_value=code)):
            response = client.post("/api/generateCode", json=VALID_BODY)
        assert response.text == code

    def test_empty_result_is_success(self):
        with patch.object(http_api, "generate_component", AsyncMock(return_value="")):
            response = client.post("/api/generateCode", json=VALID_BODY)
        assert response.status_code == 200
        assert response.text == ""


class TestGenerateCodeValidation:
    def test_missing_image_url_is_422(self):
        with patch.object(http_api, "generate_component", AsyncMock()) as generate:
            response = client.post("/api/generateCode", json={"model": "gemini"})

        assert response.status_code == 422
        assert "imageUrl" in response.text
        generate.assert_not_awaited()

    def test_wrong_shadcn_type_is_422(self):
        response = client.post("/api/generateCode", json={**VALID_BODY, "shadcn": "yes"})
        assert response.status_code == 422
        assert "shadcn" in response.text

    def test_non_json_body_is_422(self):
        response = client.post(
            "/api/generateCode",
            content=b"not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 422

    def test_json_array_body_is_422(self):
        response = client.post("/api/generateCode", json=["gemini"])
        assert response.status_code == 422


class TestGenerateCodeFailures:
    def test_image_fetch_failure_is_500_without_inference(self, keys):
        with patch.object(engine, "fetch_image", AsyncMock(side_effect=ImageFetchError("Failed to fetch the image."))), \
                patch.object(engine.service.client, "send_gemini_request") as send:
            response = client.post("/api/generateCode", json=VALID_BODY)

        assert response.status_code == 500
        assert response.text == "Internal server error"
        send.assert_not_called()

    def test_non_quota_failure_is_500_without_secondary_call(self, keys):
        keys_seen = []

        def fake_send(api_key, parts):
            keys_seen.append(api_key)
            raise BackendError("gemini", "bad request", 400)

        with patch.object(engine, "fetch_image", AsyncMock(return_value=ImagePayload(b"img"))), \
                patch.object(engine.service.client, "send_gemini_request", side_effect=fake_send):
            response = client.post("/api/generateCode", json=VALID_BODY)

        assert response.status_code == 500
        assert response.text == "Internal server error"
        assert keys_seen == ["g1"]

    def test_missing_credentials_is_500(self):
        with patch.object(engine, "fetch_image", AsyncMock(return_value=ImagePayload(b"img"))):
            response = client.post("/api/generateCode", json=VALID_BODY)
        assert response.status_code == 500

    def test_unexpected_error_does_not_leak_detail(self):
        with patch.object(http_api, "generate_component", AsyncMock(side_effect=KeyError("secret-detail"))):
            response = client.post("/api/generateCode", json=VALID_BODY)
        assert response.status_code == 500
        assert "secret-detail" not in response.text


class TestCredentialFallback:
    def test_quota_then_secondary_matches_direct_success(self, keys):
        calls = []

        def quota_then_ok(api_key, parts):
            calls.append((api_key, parts))
            if len(calls) == 1:
                raise QuotaExceededError("gemini", "Too Many Requests", 429)
            return "description" if len(calls) == 2 else "code"

        with patch.object(engine, "fetch_image", AsyncMock(return_value=ImagePayload(b"img"))), \
                patch.object(engine.service.client, "send_gemini_request", side_effect=quota_then_ok):
            recovered = client.post("/api/generateCode", json=VALID_BODY)

        with patch.object(engine, "fetch_image", AsyncMock(return_value=ImagePayload(b"img"))), \
                patch.object(engine.service.client, "send_gemini_request", side_effect=["description", "code"]):
            direct = client.post("/api/generateCode", json=VALID_BODY)

        assert recovered.status_code == direct.status_code == 200
        assert recovered.text == direct.text == "code"

        # describe replayed once with identical parts, only the key differs
        (key_1, parts_1), (key_2, parts_2) = calls[0], calls[1]
        assert (key_1, key_2) == ("g1", "g2")
        assert parts_1 == parts_2
        assert calls[2][0] == "g2"


class TestDiscovery:
    def test_models(self):
        response = client.get("/api/models")
        data = response.json()

        assert response.status_code == 200
        assert data["default"] == "gemini"
        assert {m["id"] for m in data["data"]} == {"gemini", "meta-llama"}
        assert "Button" in data["components"]

    def test_health(self):
        response = client.get("/health")
        assert response.json()["status"] == "ok"
