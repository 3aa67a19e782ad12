"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that several features use
(settings, the outbound HTTP client). Keep feature-specific fetch and
shaping logic in the corresponding feature package (e.g. `gists/`).
"""
