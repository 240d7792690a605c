"""
Tag management for a local directory tree.
Files and tags are stored in a SQLite database; tags can also be carried in file names.
"""

from .config import Config
from .errors import (
    AlreadyInitialisedError,
    ConflictError,
    DuplicateFileError,
    DuplicateRelationError,
    DuplicateTagError,
    FileRenameError,
    InvalidTagNameError,
    MalformedConfigError,
    MissingConfigError,
    MissingFileError,
    MissingTagError,
    NotFoundError,
    TagsterError,
    UninitialisedDatabaseError,
)
from .filename_tags import FilenameTags, ParsedName
from .manager import ImportFailure, ImportReport, InitialisationStatus, TagManager
from .objects import File, Tag, TagUpdate

__all__ = [
    "AlreadyInitialisedError",
    "Config",
    "ConflictError",
    "DuplicateFileError",
    "DuplicateRelationError",
    "DuplicateTagError",
    "File",
    "FileRenameError",
    "FilenameTags",
    "ImportFailure",
    "ImportReport",
    "InitialisationStatus",
    "InvalidTagNameError",
    "MalformedConfigError",
    "MissingConfigError",
    "MissingFileError",
    "MissingTagError",
    "NotFoundError",
    "ParsedName",
    "Tag",
    "TagManager",
    "TagUpdate",
    "TagsterError",
    "UninitialisedDatabaseError",
]
