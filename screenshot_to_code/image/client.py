"""Screenshot retrieval for inference backends.

Processing flow:
    1. Gemini path: download the screenshot with `fetch_image` and hand the bytes
       plus MIME type to the inline-data request.
    2. Llama path: wrap the URL in `ImageReference`; the provider fetches it.

Base64:
    `ImagePayload.b64()` encodes on demand; raw bytes are kept in memory only for
    the duration of one request.

Size validation:
    No local size limit is enforced; providers reject oversized inputs.

Error handling strategy:
    Any transport failure or non-2xx status raises `ImageFetchError`, which the
    engine reports before attempting inference.
"""

import base64
import logging
from dataclasses import dataclass

import httpx

from screenshot_to_code.llm.provider_config import IMAGE_FETCH_TIMEOUT_SECONDS


logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"


class ImageFetchError(RuntimeError):
    """The screenshot could not be retrieved from its URL."""


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    def b64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass(frozen=True)
class ImageReference:
    url: str


def _mime_type(content_type: str | None) -> str:
    """Strip parameters from a Content-Type header (`image/png; q=1` -> `image/png`)."""
    if not content_type:
        return DEFAULT_MIME_TYPE
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime or DEFAULT_MIME_TYPE


async def fetch_image(url: str, transport: httpx.AsyncBaseTransport | None = None) -> ImagePayload:
    """Download `url` and return its bytes with the advertised MIME type.

    Args:
        url: Screenshot URL from the request.
        transport: Optional httpx transport override.

    Raises:
        ImageFetchError: invalid URL, transport failure, or non-2xx status.
    """
    try:
        async with httpx.AsyncClient(
            timeout=IMAGE_FETCH_TIMEOUT_SECONDS,
            follow_redirects=True,
            transport=transport,
        ) as http:
            response = await http.get(url)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        logger.warning("Image fetch failed for %r: %s", url, type(exc).__name__)
        raise ImageFetchError("Failed to fetch the image.") from exc

    if not response.is_success:
        logger.warning("Image fetch for %r returned HTTP %s", url, response.status_code)
        raise ImageFetchError("Failed to fetch the image.")

    return ImagePayload(
        data=response.content,
        mime_type=_mime_type(response.headers.get("content-type")),
    )
