"""draftbb exception hierarchy.

Keep this module small and dependency-free: it is imported broadly across the
project and by tests.
"""


class DraftBBError(Exception):
    """Base exception for all draftbb errors."""


class DraftBBConfigError(DraftBBError):
    """Raised for invalid user configuration."""


class DraftBBInputError(DraftBBError):
    """Raised when a document cannot be read as Draft raw content."""


class DraftBBListError(DraftBBError):
    """Raised when list markup is requested for an empty run of list blocks."""
