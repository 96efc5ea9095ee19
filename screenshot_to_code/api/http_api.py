"""
HTTP API adapter for the screenshot-to-code engine.

Architectural role:
- Expose the code-generation endpoint and small discovery endpoints.
- Enforce request-schema validation before any outbound call.
- Delegate the describe -> generate pipeline to `core.engine.generate_component`.
- Map engine failures to HTTP status codes and stream successful output.

Endpoint responsibilities:
- `POST /api/generateCode`: validate, run the pipeline, stream raw code.
- `GET /api/models`: list backend identifiers and their upstream models.
- `GET /health`: liveness probe.

API request lifecycle (`POST /api/generateCode`):
1. Parse request JSON (`model`, `imageUrl`, optional `shadcn`).
2. Validate against `GenerationRequest`; failure -> HTTP 422 with the message.
3. Run `generate_component`; any failure -> HTTP 500 with a generic message.
4. Stream the buffered code as `text/plain` with `Cache-Control: no-cache`.

Error handling strategy:
- Validation failures return the pydantic message as plain text.
- All other exceptions are logged with traceback and never leaked to the caller.
"""

import json
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse
from pydantic import ValidationError

from screenshot_to_code.core.engine import generate_component, iter_chunks
from screenshot_to_code.core.request_types import (
    DEFAULT_BACKEND,
    Backend,
    GenerationRequest,
    RequestState,
)
from screenshot_to_code.llm.provider_config import APP_NAME, BACKEND_MODELS
from screenshot_to_code.prompting.shadcn_docs import component_names


logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME)

INTERNAL_ERROR_MESSAGE = "Internal server error"


# ============================================================
# Discovery
# ============================================================

@app.get("/health")
def health():
    return {"status": "ok", "service": APP_NAME}


@app.get("/api/models")
def list_models():
    """Return selectable backends, the default backend and catalog component names."""
    return {
        "object": "list",
        "default": DEFAULT_BACKEND.value,
        "data": [
            {
                "id": backend.value,
                "object": "model",
                "upstream_model": BACKEND_MODELS[backend],
            }
            for backend in Backend
        ],
        "components": component_names(),
    }


# ============================================================
# Code Generation
# ============================================================

def _stream_code(code: str, request_id: str):
    """Yield code chunks and log completion once the body is fully written."""
    yield from iter_chunks(code)
    logger.debug("request=%s %s -> %s", request_id, RequestState.STREAMING.value, RequestState.DONE.value)


@app.post("/api/generateCode")
async def generate_code(request: Request):
    """
    Generate React/Tailwind code for a screenshot.

    Input validation behavior:
    - Non-JSON body -> HTTP 422.
    - Schema violation (missing `imageUrl`, non-boolean `shadcn`, ...) -> HTTP 422
      with the validation message.

    Error handling strategy:
    - Image fetch and inference failures -> HTTP 500 `Internal server error`.
    - No partial body is ever sent; the code is complete before streaming starts.
    """
    request_id = uuid.uuid4().hex[:12]

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.error("request=%s invalid JSON body: %s", request_id, exc)
        return PlainTextResponse(f"Invalid JSON body: {exc}", status_code=422)

    try:
        payload = GenerationRequest.model_validate(body)
    except ValidationError as exc:
        logger.error("request=%s validation error: %s", request_id, exc)
        return PlainTextResponse(str(exc), status_code=422)

    try:
        code = await generate_component(payload, request_id=request_id)
    except Exception:
        logger.exception("request=%s unexpected error", request_id)
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)

    return StreamingResponse(
        _stream_code(code, request_id),
        media_type="text/plain; charset=utf-8",
        headers={"Cache-Control": "no-cache"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
