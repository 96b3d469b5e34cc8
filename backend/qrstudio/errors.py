"""Exception hierarchy shared by the engine and the API layer."""

from __future__ import annotations


class QrStudioError(Exception):
    """Base class for all qrstudio errors."""


class EncodingError(QrStudioError):
    """Payload could not be turned into QR content or into a symbol."""


class LogoFetchError(QrStudioError):
    """Logo bytes could not be loaded. Recoverable: the logo is skipped."""


class ColorError(ValueError):
    """A color string could not be parsed."""


class ValidationError(QrStudioError):
    """One or more design fields are invalid.

    ``issues`` is a list of ``{"field": ..., "message": ...}`` dicts, the same
    shape ``validate_design`` returns.
    """

    def __init__(self, issues: list[dict[str, str]]) -> None:
        self.issues = issues
        summary = "; ".join(f"{i['field']}: {i['message']}" for i in issues)
        super().__init__(summary or "invalid design")
