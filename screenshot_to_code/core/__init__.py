"""Core orchestration package.

Architectural role:
    Exposes the request pipeline that sits between the API/CLI entrypoints and
    the lower-level prompting, image and inference layers.

Composition:
    - `engine`: describe -> generate control flow and output cleanup.
    - `request_types`: request schema, backend identifiers and lifecycle states.
"""
