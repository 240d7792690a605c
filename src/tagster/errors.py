"""Errors raised by the tag management core.

    TagsterError
    |__ NotFoundError
    |   |__ MissingTagError
    |   |__ MissingFileError
    |   |__ MissingConfigError
    |__ ConflictError
    |   |__ DuplicateTagError
    |   |__ DuplicateFileError
    |   |__ DuplicateRelationError
    |__ AlreadyInitialisedError
    |__ UninitialisedDatabaseError
    |__ MalformedConfigError
    |__ InvalidTagNameError
    |__ FileRenameError
"""


class TagsterError(Exception):
    msg_template = "Tag manager error"

    def __init__(self, **ctx):
        self.ctx = ctx
        for key, value in ctx.items():
            setattr(self, key, value)
        super().__init__(self.msg_template.format(**ctx))


#
# Not found
#
class NotFoundError(TagsterError):
    msg_template = "Requested item was not found: {reason}"


class MissingTagError(NotFoundError):
    msg_template = "Tag {tag_id} was not found"


class MissingFileError(NotFoundError):
    msg_template = "File {file} was not found"


class MissingConfigError(NotFoundError):
    msg_template = "No management system found at {root}: missing {config_file}"


#
# Conflicts
#
class ConflictError(TagsterError):
    msg_template = "Conflicting item already exists: {reason}"


class DuplicateTagError(ConflictError):
    msg_template = "A tag named '{name}' already exists"


class DuplicateFileError(ConflictError):
    msg_template = "File '{path}' is already registered"


class DuplicateRelationError(ConflictError):
    msg_template = "File {file_id} already carries tag {tag_id}"


#
# Management system state
#
class AlreadyInitialisedError(TagsterError):
    msg_template = "Directory {root} is already initialised"


class UninitialisedDatabaseError(TagsterError):
    msg_template = "Directory {root} has a config file but no database at {database_file}"


class MalformedConfigError(TagsterError):
    msg_template = "Config file {config_file} is malformed: {reason}"


class InvalidTagNameError(TagsterError):
    msg_template = "Tag name '{name}' is not allowed: {reason}"


class FileRenameError(TagsterError):
    """Filesystem failure while renaming a file after its tags changed.

    `rolled_back` tells whether the database change that triggered the rename
    was reverted, leaving database and filesystem consistent.
    """

    msg_template = "Could not rename '{source}' to '{target}': {reason}"
