"""Core request orchestration for screenshot description and code generation.

Architectural role:
    Provides the single execution pipeline used by the HTTP and CLI adapters to
    turn one validated `GenerationRequest` into component source code.

Control-flow model:
    RECEIVED -> VALIDATED -> DESCRIBING -> DESCRIBED -> GENERATING_CODE ->
    STREAMING -> DONE, with ERROR reachable from every non-terminal state.

    1. Resolve the backend from `request.model` (unknown values -> default).
    2. Gemini only: fetch the screenshot bytes; failure stops the request before
       any inference call.
    3. Describe the screenshot (credential fallback inside `llm.service`).
    4. Build the code prompt and generate code with the credential pair that
       served the describe call.
    5. Strip Markdown fence lines and hand the text to the adapter for streaming.

Error handling strategy:
    Errors are logged with the state they interrupted and re-raised unchanged;
    adapters map them to transport-level responses.

Buffering:
    The full code result is produced before any output is emitted, so failures
    never surface after a response has started.
"""

import asyncio
import logging
import re
from typing import Iterator

from screenshot_to_code.core.request_types import (
    Backend,
    GenerationRequest,
    RequestState,
    resolve_backend,
)
from screenshot_to_code.image.client import ImageReference, fetch_image
from screenshot_to_code.llm import service
from screenshot_to_code.llm.provider_config import load_credentials
from screenshot_to_code.prompting.prompt_builder import build_code_prompt


logger = logging.getLogger(__name__)

# A whole line that opens or closes a Markdown code fence, with optional language tag.
_FENCE_LINE_RE = re.compile(r"^[ \t]*(```|~~~)[\w+#.-]*[ \t]*$", re.MULTILINE)
_FENCE_RE = re.compile(r"```")

STREAM_CHUNK_SIZE = 1024


def strip_code_fences(code: str) -> str:
    """Remove Markdown fence delimiters from model output.

    Fence lines are dropped entirely; stray inline fences are removed so the
    returned text never contains a triple backtick.
    """
    without_lines = _FENCE_LINE_RE.sub("", code)
    cleaned = _FENCE_RE.sub("", without_lines)
    return cleaned.strip("\n")


def iter_chunks(text: str, size: int = STREAM_CHUNK_SIZE) -> Iterator[str]:
    """Yield `text` in order as consecutive slices of at most `size` characters."""
    for start in range(0, len(text), size):
        yield text[start:start + size]


class _StateLog:
    """Per-request state tracker used for transition logging."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        self.state = RequestState.RECEIVED
        self.history = [RequestState.RECEIVED]

    def advance(self, state: RequestState) -> None:
        logger.debug("request=%s %s -> %s", self.request_id, self.state.value, state.value)
        self.state = state
        self.history.append(state)


async def generate_component(
    request: GenerationRequest,
    request_id: str = "-",
    states: list | None = None,
) -> str:
    """Run the two-stage describe -> generate pipeline for one request.

    Args:
        request: Validated request.
        request_id: Identifier used in log records.
        states: Optional list that receives the visited `RequestState` values,
            for callers that report progress.

    Returns:
        Generated component code with fences removed. May be empty when the
        backend returns no content.

    Raises:
        ImageFetchError: screenshot could not be retrieved (Gemini only).
        BackendError: inference failed after any credential fallback.
    """
    tracker = _StateLog(request_id)
    tracker.advance(RequestState.VALIDATED)

    backend = resolve_backend(request.model)
    credentials = load_credentials(backend)

    logger.info(
        "request=%s backend=%s shadcn=%s",
        request_id,
        backend.value,
        request.shadcn,
    )

    try:
        if backend == Backend.LLAMA:
            image = ImageReference(request.image_url)
        else:
            image = await fetch_image(request.image_url)

        tracker.advance(RequestState.DESCRIBING)
        described = await asyncio.to_thread(service.describe, backend, image, credentials)
        tracker.advance(RequestState.DESCRIBED)

        code_prompt = build_code_prompt(described.text, request.shadcn)

        tracker.advance(RequestState.GENERATING_CODE)
        generated = await asyncio.to_thread(
            service.generate_code, backend, code_prompt, described.credentials
        )
        code = strip_code_fences(generated.text)
        tracker.advance(RequestState.STREAMING)

    except Exception:
        logger.warning("request=%s failed in state %s", request_id, tracker.state.value)
        tracker.advance(RequestState.ERROR)
        raise

    finally:
        if states is not None:
            states.extend(tracker.history)

    logger.info(
        "request=%s description_chars=%d code_chars=%d",
        request_id,
        len(described.text),
        len(code),
    )
    return code
