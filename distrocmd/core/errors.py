"""
Engine errors — the failure taxonomy of a resolution call.

NotFoundError and InvalidInputError abort the whole call.
TemplateError is raised while rendering a single source and is
caught by the synthesizer, which moves that source's apps into
``unresolved`` instead of failing the call.

Partially unsatisfiable requests are NOT errors: they come back as
a normal result with warnings and manual steps.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for command-engine errors."""

    status_code = 500


class NotFoundError(EngineError):
    """Raised when the requested distribution does not exist."""

    status_code = 404


class InvalidInputError(EngineError):
    """Raised for an empty app list or a malformed preference/method."""

    status_code = 400


class TemplateError(EngineError):
    """Raised when a source's command template is malformed.

    Indicates corrupt admin data, not user error.
    """

    def __init__(self, source_slug: str, message: str):
        super().__init__(f"Source '{source_slug}': {message}")
        self.source_slug = source_slug
