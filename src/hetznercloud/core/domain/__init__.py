"""Domain models.

Why:
- Plain, strict data structures (Pydantic v2) mirroring the API's JSON.
- The domain knows nothing about HTTP or the CLI.
"""
