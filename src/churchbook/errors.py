"""Exception hierarchy for Churchbook."""

from __future__ import annotations


class ChurchbookError(Exception):
    """Base class for all errors raised by the package."""


class ValidationError(ChurchbookError):
    """A record could not be built from the supplied fields."""


class AuthError(ChurchbookError):
    """Login form was incomplete."""


class AttachmentError(ChurchbookError):
    """An attachment reference could not be decoded."""


class SnapshotError(ChurchbookError):
    """A JSON snapshot could not be read."""


class AdvisorError(ChurchbookError):
    """The AI advisor could not produce a result."""
