"""Screenshot retrieval package.

Scope:
    Downloads screenshots for backends that need inline image data and wraps
    image URLs for backends that fetch them themselves.

Non-goals:
    - No image decoding, resizing or format conversion.
    - No temporary-file creation or cleanup responsibilities.
"""
