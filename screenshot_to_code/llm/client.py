"""Provider-specific transport client for inference requests.

Architectural role:
    Executes HTTP requests against the two hosted backends and normalizes their
    responses into text or an ordered iterator of text fragments.

Model invocation flow:
    `service.describe` / `service.generate_code` -> `call_with_fallback` ->
    `send_gemini_request(...)` (single response) or
    `stream_chat_completion(...)` -> `collect_fragments(...)` (streamed response).

Retry behavior:
    No retry loop is implemented here. Each call is attempted once; the single
    credential fallback lives in `service`.

Credential handling:
    The API key is an explicit argument of every call. No client object or key is
    cached at module level, so concurrent requests never share a credential handle.

Failure handling model:
    - HTTP 429 (or a "Too Many Requests" message) -> `QuotaExceededError`.
    - Other non-2xx statuses, transport failures and malformed payloads ->
      `BackendError`.
"""

import json
import logging
from typing import Iterable, Iterator

import requests

from screenshot_to_code.llm.errors import BackendError, QuotaExceededError
from screenshot_to_code.llm.provider_config import (
    GEMINI_MODEL,
    GEMINI_URL_TEMPLATE,
    HF_CHAT_URL,
    HF_MODEL,
    LLM_TIMEOUT_SECONDS,
)


logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = "Too Many Requests"


def _raise_for_status(provider: str, response: requests.Response) -> None:
    """Map a non-2xx provider response to the error taxonomy."""
    if response.ok:
        return

    detail = (response.text or response.reason or "").strip()[:500]
    if response.status_code == 429 or TOO_MANY_REQUESTS in detail:
        raise QuotaExceededError(provider, detail or TOO_MANY_REQUESTS, response.status_code)
    raise BackendError(provider, detail or "unexpected status", response.status_code)


def _post(provider: str, url: str, **kwargs) -> requests.Response:
    try:
        response = requests.post(url, timeout=LLM_TIMEOUT_SECONDS, **kwargs)
    except requests.exceptions.RequestException as err:
        if TOO_MANY_REQUESTS in str(err):
            raise QuotaExceededError(provider, str(err)) from err
        raise BackendError(provider, type(err).__name__) from err

    _raise_for_status(provider, response)
    return response


# =========================================================
# GEMINI (generateContent, single response)
# =========================================================

def gemini_text_part(text: str) -> dict:
    return {"text": text}


def gemini_image_part(data_b64: str, mime_type: str) -> dict:
    return {"inline_data": {"mime_type": mime_type, "data": data_b64}}


def send_gemini_request(api_key: str, parts: list, model: str = GEMINI_MODEL) -> str:
    """Send one `generateContent` call and return the first candidate's text.

    Args:
        api_key: Gemini API key for this call.
        parts: Ordered content parts (`gemini_text_part` / `gemini_image_part`).
        model: Upstream Gemini model name.

    Returns:
        Concatenated text of all parts of the first candidate. A candidate
        without parts yields an empty string.

    Failure scenarios:
        - No candidates in the payload (for example a blocked prompt) ->
          `BackendError` carrying the block reason when present.
        - Non-JSON payload -> `BackendError`.
    """
    url = GEMINI_URL_TEMPLATE.format(model=model)

    headers = {
        "x-goog-api-key": api_key,
        "Content-Type": "application/json",
    }

    payload = {
        "contents": [
            {"role": "user", "parts": parts},
        ],
    }

    response = _post("gemini", url, headers=headers, json=payload)

    try:
        data = response.json()
    except ValueError as err:
        raise BackendError("gemini", "response is not valid JSON") from err

    candidates = data.get("candidates") or []
    if not candidates:
        reason = (data.get("promptFeedback") or {}).get("blockReason", "no candidates returned")
        raise BackendError("gemini", str(reason))

    content = candidates[0].get("content") or {}
    return "".join(part.get("text", "") for part in content.get("parts") or [])


# =========================================================
# LLAMA VISION (OpenAI-compatible chat completions, streamed)
# =========================================================

def chat_text_content(text: str) -> dict:
    return {"type": "text", "text": text}


def chat_image_content(url: str) -> dict:
    return {"type": "image_url", "image_url": {"url": url}}


def _parse_stream_line(line: str) -> str | None:
    """Extract the delta text from one server-sent event line.

    Returns `None` for keep-alives, comments, unparsable lines and chunks that
    carry no `delta.content`.
    """
    if line.startswith("data:"):
        line = line[5:].strip()

    if not line or line.startswith(":"):
        return None

    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        logger.debug("Skipping unparsable stream line: %r", line[:200])
        return None

    if "error" in data:
        message = data["error"]
        if isinstance(message, dict):
            message = message.get("message", "")
        message = str(message)
        if TOO_MANY_REQUESTS in message:
            raise QuotaExceededError("huggingface", message)
        raise BackendError("huggingface", message)

    choices = data.get("choices") or []
    if not choices:
        return None

    delta = choices[0].get("delta") or {}
    return delta.get("content")


def stream_chat_completion(
    api_key: str,
    content: list,
    max_tokens: int,
    model: str = HF_MODEL,
) -> Iterator[str]:
    """Yield text fragments of a streamed chat completion in arrival order.

    Args:
        api_key: Hugging Face token for this call.
        content: User message content items (`chat_text_content` /
            `chat_image_content`).
        max_tokens: Upper bound forwarded to the provider.
        model: Upstream model id.

    Behavior:
        - The HTTP request is issued when iteration starts; status errors are
          raised before the first fragment.
        - Iteration ends on `[DONE]` or when the connection closes.
        - The iterator is finite and cannot be restarted.
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    payload = {
        "model": model,
        "messages": [
            {"role": "user", "content": content},
        ],
        "max_tokens": max_tokens,
        "stream": True,
    }

    with _post("huggingface", HF_CHAT_URL, headers=headers, json=payload, stream=True) as response:
        response.encoding = "utf-8"
        try:
            for line in response.iter_lines(decode_unicode=True):
                if not line:
                    continue
                if line.strip() in ("[DONE]", "data: [DONE]"):
                    break

                fragment = _parse_stream_line(line)
                if fragment:
                    yield fragment
        except requests.exceptions.RequestException as err:
            raise BackendError("huggingface", f"stream interrupted ({type(err).__name__})") from err


def collect_fragments(fragments: Iterable[str]) -> str:
    """Drain a fragment iterator into one string, preserving order.

    An iterator that ends without yielding anything produces `""`.
    """
    return "".join(fragments)
