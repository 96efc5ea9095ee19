"""Inference access package.

Architectural role:
    Provides backend configuration, transport adapters and the credential
    fallback used by the engine to invoke vision and code-generation models.

Module split:
    - `provider_config`: environment-driven endpoints, models and credentials.
    - `client`: provider-specific HTTP transport and response parsing.
    - `service`: `describe` / `generate_code` operations with key fallback.
    - `errors`: backend error taxonomy.
"""
