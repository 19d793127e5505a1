from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("draftbb")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

from draftbb.convert import convert  # noqa: E402
from draftbb.errors import (  # noqa: E402
    DraftBBConfigError,
    DraftBBError,
    DraftBBInputError,
    DraftBBListError,
)
from draftbb.model import Block, Document, Entity, EntityRange, StyleRange  # noqa: E402
from draftbb.sections import HashtagConfig  # noqa: E402

__all__ = [
    "Block",
    "Document",
    "DraftBBConfigError",
    "DraftBBError",
    "DraftBBInputError",
    "DraftBBListError",
    "Entity",
    "EntityRange",
    "HashtagConfig",
    "StyleRange",
    "__version__",
    "convert",
]
