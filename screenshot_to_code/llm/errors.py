"""Exception taxonomy for inference backends.

`QuotaExceededError` is the only error recovered locally (by the credential
fallback in `service`). Everything else propagates to the HTTP adapter, which
maps it to a generic server error.
"""


class BackendError(RuntimeError):
    """Inference call failed (HTTP status, transport error, or malformed payload)."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        self.provider = provider
        self.status_code = status_code
        label = provider.upper()
        if status_code:
            super().__init__(f"{label} HTTP ERROR ({status_code}): {message}")
        else:
            super().__init__(f"{label} REQUEST FAILED: {message}")


class QuotaExceededError(BackendError):
    """Backend answered with a "Too Many Requests" signal."""


class MissingCredentialError(BackendError):
    """No primary API key is configured for the backend."""
