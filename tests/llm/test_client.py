"""
Unit tests for the provider transport client.

Covers Gemini response parsing, streamed chat-completion fragment handling,
and the mapping of HTTP/transport failures onto the backend error taxonomy.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from screenshot_to_code.llm import client
from screenshot_to_code.llm.errors import BackendError, QuotaExceededError


def make_response(status=200, json_data=None, lines=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.text = text
    resp.reason = "Too Many Requests" if status == 429 else "Error"
    resp.json.return_value = json_data if json_data is not None else {}
    resp.iter_lines.return_value = lines or []
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    return resp


def sse(content):
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]})


GEMINI_OK = {
    "candidates": [
        {"content": {"parts": [{"text": "import React"}, {"text": " from 'react'"}]}}
    ]
}


class TestGemini:
    def test_joins_candidate_parts(self):
        with patch.object(client.requests, "post", return_value=make_response(json_data=GEMINI_OK)) as post:
            text = client.send_gemini_request("key-1", [client.gemini_text_part("hi")])

        assert text == "import React from 'react'"
        kwargs = post.call_args.kwargs
        assert kwargs["headers"]["x-goog-api-key"] == "key-1"
        assert kwargs["json"] == {"contents": [{"role": "user", "parts": [{"text": "hi"}]}]}

    def test_image_part_shape(self):
        part = client.gemini_image_part("QUJD", "image/png")
        assert part == {"inline_data": {"mime_type": "image/png", "data": "QUJD"}}

    def test_candidate_without_parts_is_empty_result(self):
        data = {"candidates": [{"content": {}}]}
        with patch.object(client.requests, "post", return_value=make_response(json_data=data)):
            assert client.send_gemini_request("k", []) == ""

    def test_no_candidates_raises_backend_error(self):
        data = {"promptFeedback": {"blockReason": "SAFETY"}}
        with patch.object(client.requests, "post", return_value=make_response(json_data=data)):
            with pytest.raises(BackendError, match="SAFETY"):
                client.send_gemini_request("k", [])

    def test_429_raises_quota_error(self):
        resp = make_response(status=429, text='{"error": {"status": "RESOURCE_EXHAUSTED"}}')
        with patch.object(client.requests, "post", return_value=resp):
            with pytest.raises(QuotaExceededError) as info:
                client.send_gemini_request("k", [])
        assert info.value.status_code == 429

    def test_too_many_requests_message_raises_quota_error(self):
        resp = make_response(status=503, text="Too Many Requests, slow down")
        with patch.object(client.requests, "post", return_value=resp):
            with pytest.raises(QuotaExceededError):
                client.send_gemini_request("k", [])

    def test_server_error_is_not_quota_error(self):
        resp = make_response(status=500, text="boom")
        with patch.object(client.requests, "post", return_value=resp):
            with pytest.raises(BackendError) as info:
                client.send_gemini_request("k", [])
        assert not isinstance(info.value, QuotaExceededError)
        assert info.value.status_code == 500

    def test_transport_error_wrapped(self):
        with patch.object(client.requests, "post", side_effect=requests.exceptions.ConnectionError("down")):
            with pytest.raises(BackendError):
                client.send_gemini_request("k", [])


class TestChatCompletionStream:
    def test_fragments_preserve_order(self):
        lines = [sse("a"), "", sse("b"), ": keep-alive", sse("c"), "data: [DONE]", sse("ignored")]
        with patch.object(client.requests, "post", return_value=make_response(lines=lines)) as post:
            fragments = list(client.stream_chat_completion("hf-key", [client.chat_text_content("x")], 10))

        assert fragments == ["a", "b", "c"]
        kwargs = post.call_args.kwargs
        assert kwargs["headers"]["Authorization"] == "Bearer hf-key"
        assert kwargs["json"]["stream"] is True
        assert kwargs["json"]["max_tokens"] == 10
        assert kwargs["stream"] is True

    def test_chunks_without_content_are_skipped(self):
        lines = [
            "data: " + json.dumps({"choices": [{"delta": {"role": "assistant"}}]}),
            "data: " + json.dumps({"choices": []}),
            sse("only"),
        ]
        with patch.object(client.requests, "post", return_value=make_response(lines=lines)):
            assert list(client.stream_chat_completion("k", [], 10)) == ["only"]

    def test_empty_stream_is_empty_result(self):
        with patch.object(client.requests, "post", return_value=make_response(lines=["data: [DONE]"])):
            assert client.collect_fragments(client.stream_chat_completion("k", [], 10)) == ""

    def test_large_result_not_truncated(self):
        lines = [sse("x" * 1000) for _ in range(200)]
        with patch.object(client.requests, "post", return_value=make_response(lines=lines)):
            text = client.collect_fragments(client.stream_chat_completion("k", [], 10))
        assert len(text) == 200_000

    def test_request_issued_lazily(self):
        with patch.object(client.requests, "post", return_value=make_response(lines=[])) as post:
            stream = client.stream_chat_completion("k", [], 10)
            post.assert_not_called()
            list(stream)
            post.assert_called_once()

    def test_429_raised_before_first_fragment(self):
        with patch.object(client.requests, "post", return_value=make_response(status=429, text="Too Many Requests")):
            with pytest.raises(QuotaExceededError):
                next(client.stream_chat_completion("k", [], 10))

    def test_in_stream_error_event(self):
        lines = [sse("a"), "data: " + json.dumps({"error": "Model is overloaded"})]
        with patch.object(client.requests, "post", return_value=make_response(lines=lines)):
            with pytest.raises(BackendError, match="overloaded"):
                list(client.stream_chat_completion("k", [], 10))

    def test_image_content_shape(self):
        assert client.chat_image_content("https://x/y.png") == {
            "type": "image_url",
            "image_url": {"url": "https://x/y.png"},
        }
