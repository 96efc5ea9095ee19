"""Provider/runtime configuration for the inference layer.

Architectural role:
    Centralizes backend endpoints, upstream model names, timeouts and credential
    lookup for `screenshot_to_code.llm.client` and `screenshot_to_code.llm.service`.

Model call flow integration:
    - `client` consumes endpoint URLs, model names and `LLM_TIMEOUT_SECONDS`.
    - `service` resolves a `CredentialPair` per call through `load_credentials`.

Determinism:
    Endpoint/model constants are resolved once at import time. Credentials are
    resolved at call time so key rotation in the environment takes effect without
    a restart.

Failure behavior:
    Missing key material is represented as `None`; callers decide whether that is
    fatal (primary) or simply disables fallback (secondary).
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

from screenshot_to_code.core.request_types import Backend

load_dotenv()

APP_NAME = os.getenv("APP_NAME", "Screenshot to Code")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Per-call HTTP timeout for inference requests (seconds).
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "120"))
IMAGE_FETCH_TIMEOUT_SECONDS = float(os.getenv("IMAGE_FETCH_TIMEOUT_SECONDS", "30"))

# Gemini (inline image data) backend.
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-pro")
GEMINI_URL_TEMPLATE = os.getenv(
    "GEMINI_URL_TEMPLATE",
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
)

# Llama vision (image reference) backend, OpenAI-compatible chat completions.
HF_MODEL = os.getenv("HF_MODEL", "meta-llama/Llama-3.2-11B-Vision-Instruct")
HF_CHAT_URL = os.getenv("HF_CHAT_URL", "https://router.huggingface.co/v1/chat/completions")

DESCRIBE_MAX_TOKENS = 500
CODE_MAX_TOKENS = 2000

# Upstream model served for each backend identifier.
BACKEND_MODELS = {
    Backend.GEMINI: GEMINI_MODEL,
    Backend.LLAMA: HF_MODEL,
}

# Environment variable and key-file locations per backend: (primary, secondary).
CREDENTIAL_SOURCES = {
    Backend.GEMINI: (
        ("GEMINI_API_KEY", "config/gemini.key"),
        ("GEMINI_API_KEY_2", "config/gemini_2.key"),
    ),
    Backend.LLAMA: (
        ("HF_API_KEY", "config/hf.key"),
        ("HF_API_KEY_2", "config/hf_2.key"),
    ),
}


@dataclass(frozen=True)
class CredentialPair:
    """Primary and optional secondary API key for one backend.

    Instances are never mutated. After a quota fallback the caller receives a
    promoted pair instead, so the rest of the request keeps using the key that
    worked and cannot fall back a second time.
    """

    primary: str | None
    secondary: str | None = None

    @property
    def can_fall_back(self) -> bool:
        return bool(self.secondary) and self.secondary != self.primary

    def promote(self) -> "CredentialPair":
        return CredentialPair(primary=self.secondary, secondary=None)


def load_key(env_name, path):
    """Load an API key from an environment variable or a key file.

    Resolution order:
        1. `env_name` in the process environment.
        2. Raw file contents at `path`.

    Returns:
        Key string or `None` when not available.

    Edge cases:
        - Empty/whitespace variable values count as unset.
        - `None` path or missing file returns `None`.
    """
    env_value = os.getenv(env_name, "").strip()
    if env_value:
        return env_value
    if not path or not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None


def load_credentials(backend: Backend) -> CredentialPair:
    """Resolve the credential pair for `backend` from current configuration."""
    (primary_env, primary_file), (secondary_env, secondary_file) = CREDENTIAL_SOURCES[backend]
    return CredentialPair(
        primary=load_key(primary_env, primary_file),
        secondary=load_key(secondary_env, secondary_file),
    )
