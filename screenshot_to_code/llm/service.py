"""Backend-agnostic inference operations with credential fallback.

Architectural role:
    Provides the two operations the engine needs (`describe`, `generate_code`),
    each expressed once per backend and wrapped by the same
    `call_with_fallback` helper.

Model call flow:
    engine -> `describe(backend, image, credentials)` ->
    `call_with_fallback(call, credentials)` -> `client.*` transport.

Credential fallback:
    A quota failure with the primary key replays the identical call exactly once
    with the secondary key. The returned `Completion` carries the credential pair
    the next call of the same request must use (promoted after a fallback).

Determinism:
    Payload construction is deterministic for fixed inputs and configuration.
    Generated text remains non-deterministic.
"""

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from screenshot_to_code.core.request_types import Backend
from screenshot_to_code.image.client import ImagePayload, ImageReference
from screenshot_to_code.llm import client
from screenshot_to_code.llm.errors import MissingCredentialError, QuotaExceededError
from screenshot_to_code.llm.provider_config import (
    CODE_MAX_TOKENS,
    DESCRIBE_MAX_TOKENS,
    CredentialPair,
)
from screenshot_to_code.prompting.prompt_builder import DESCRIPTION_PROMPT


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Completion:
    """Text produced by one adapter operation and the credentials to use next."""

    text: str
    credentials: CredentialPair


def call_with_fallback(
    call: Callable[[str], T],
    credentials: CredentialPair,
    provider: str = "provider",
) -> tuple[T, CredentialPair]:
    """Run `call(api_key)` with the primary key, falling back once on quota errors.

    Args:
        call: Performs the full backend call (including draining any stream) for
            one API key.
        credentials: Key pair resolved for this request.
        provider: Label used in errors and logs.

    Returns:
        `(result, credentials_used)` where `credentials_used` is `credentials`
        itself, or its promoted pair when the secondary key served the call.

    Failure scenarios:
        - No primary key -> `MissingCredentialError`.
        - Quota error with no usable secondary key -> re-raised unchanged.
        - Any failure of the replayed call -> propagated unchanged.
        - Non-quota failures are never retried.
    """
    if not credentials.primary:
        raise MissingCredentialError(provider, "no API key configured")

    try:
        return call(credentials.primary), credentials
    except QuotaExceededError:
        if not credentials.can_fall_back:
            raise
        logger.warning("%s quota exceeded on primary key, retrying with secondary key", provider)

    promoted = credentials.promote()
    return call(promoted.primary), promoted


# =========================================================
# DESCRIBE
# =========================================================

def _describe_with_gemini(image: ImagePayload, api_key: str) -> str:
    parts = [
        client.gemini_text_part(DESCRIPTION_PROMPT),
        client.gemini_image_part(image.b64(), image.mime_type),
    ]
    return client.send_gemini_request(api_key, parts)


def _describe_with_llama(image: ImageReference, api_key: str) -> str:
    content = [
        client.chat_text_content(DESCRIPTION_PROMPT),
        client.chat_image_content(image.url),
    ]
    return client.collect_fragments(
        client.stream_chat_completion(api_key, content, max_tokens=DESCRIBE_MAX_TOKENS)
    )


def describe(backend: Backend, image, credentials: CredentialPair) -> Completion:
    """Ask the backend's vision model to describe a screenshot.

    Args:
        backend: Selected backend.
        image: `ImagePayload` for Gemini, `ImageReference` for Llama.
        credentials: Key pair for this request.
    """
    if backend == Backend.LLAMA:
        text, used = call_with_fallback(
            lambda key: _describe_with_llama(image, key), credentials, "huggingface"
        )
    else:
        text, used = call_with_fallback(
            lambda key: _describe_with_gemini(image, key), credentials, "gemini"
        )
    return Completion(text=text, credentials=used)


# =========================================================
# GENERATE CODE
# =========================================================

def _generate_with_gemini(prompt_text: str, api_key: str) -> str:
    return client.send_gemini_request(api_key, [client.gemini_text_part(prompt_text)])


def _generate_with_llama(prompt_text: str, api_key: str) -> str:
    content = [client.chat_text_content(prompt_text)]
    return client.collect_fragments(
        client.stream_chat_completion(api_key, content, max_tokens=CODE_MAX_TOKENS)
    )


def generate_code(backend: Backend, prompt_text: str, credentials: CredentialPair) -> Completion:
    """Ask the backend to turn a fully built code prompt into component code."""
    if backend == Backend.LLAMA:
        text, used = call_with_fallback(
            lambda key: _generate_with_llama(prompt_text, key), credentials, "huggingface"
        )
    else:
        text, used = call_with_fallback(
            lambda key: _generate_with_gemini(prompt_text, key), credentials, "gemini"
        )
    return Completion(text=text, credentials=used)
