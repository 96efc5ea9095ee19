"""Request data contracts for `screenshot_to_code.core.engine`.

Architectural role:
    Defines the validated inbound request, the backend identifiers it can select,
    and the per-request lifecycle states logged by the engine.

Control-flow interaction:
    `api.http_api` validates raw JSON into `GenerationRequest`; `engine` maps
    `GenerationRequest.model` to a `Backend` with `resolve_backend` and walks the
    `RequestState` sequence.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class Backend(str, Enum):
    """Hosted inference backends addressable by the `model` request field."""

    GEMINI = "gemini"
    LLAMA = "meta-llama"


DEFAULT_BACKEND = Backend.GEMINI


class RequestState(str, Enum):
    """Linear request lifecycle; `ERROR` is reachable from any non-terminal state."""

    RECEIVED = "received"
    VALIDATED = "validated"
    DESCRIBING = "describing"
    DESCRIBED = "described"
    GENERATING_CODE = "generating_code"
    STREAMING = "streaming"
    DONE = "done"
    ERROR = "error"


class GenerationRequest(BaseModel):
    """Inbound body of `POST /api/generateCode`.

    Note:
    - `model` is any string; values outside `Backend` select `DEFAULT_BACKEND`.
    - Field types are strict, so `"true"` is not accepted for `shadcn`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    model: StrictStr
    image_url: StrictStr = Field(alias="imageUrl")
    shadcn: StrictBool = False


def resolve_backend(model: str) -> Backend:
    """Return the backend named by `model`, or the default backend."""
    try:
        return Backend(model)
    except ValueError:
        return DEFAULT_BACKEND
