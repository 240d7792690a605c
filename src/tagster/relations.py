"""Links between files and tags, and the file names that mirror them."""

import logging
from typing import Iterable, List, Union

from sqlalchemy import and_, or_, literal_column

from .errors import DuplicateRelationError, MissingFileError, MissingTagError
from .filename_tags import FilenameTags
from .models import FileRecord, TagRecord, file_tags
from .objects import File, Tag

logger = logging.getLogger(__name__)

# Link rows keep SQLite's implicit rowid, which follows insertion order
_LINK_ORDER = literal_column('file_tags.rowid')


def _id(item: Union[File, Tag, int]) -> int:
    return item if isinstance(item, int) else item.id


class RelationEngine:
    """Manages relations between files and tags."""

    def __init__(self, context):
        self._context = context

    @property
    def session(self):
        return self._context.session

    def _file_record(self, file: Union[File, int]) -> FileRecord:
        record = self.session.query(FileRecord).filter_by(id=_id(file)).first()
        if record is None:
            raise MissingFileError(file=_id(file))
        return record

    def _tag_record(self, tag: Union[Tag, int]) -> TagRecord:
        record = self.session.query(TagRecord).filter_by(id=_id(tag)).first()
        if record is None:
            raise MissingTagError(tag_id=_id(tag))
        return record

    #
    # Queries
    #

    def tags_for_file(self, file: Union[File, int]) -> List[Tag]:
        """Tags on a file, in the order they were attached."""
        query = (
            self.session.query(TagRecord)
            .join(file_tags, file_tags.c.tag_id == TagRecord.id)
            .filter(file_tags.c.file_id == _id(file))
            .order_by(_LINK_ORDER)
        )
        return [Tag.from_record(t) for t in query]

    def files_for_tag(self, tag: Union[Tag, int]) -> List[File]:
        """Files carrying a tag, in the order the tag was attached to them."""
        query = (
            self.session.query(FileRecord)
            .join(file_tags, file_tags.c.file_id == FileRecord.id)
            .filter(file_tags.c.tag_id == _id(tag))
            .order_by(_LINK_ORDER)
        )
        return [self._context.files.hydrate(f) for f in query]

    def files_with_tags(self, tags: Iterable[Union[Tag, int]], match_all: bool = True) -> List[File]:
        """Files carrying all of `tags`, or any of them when `match_all` is False."""
        conditions = [FileRecord.tags.any(TagRecord.id == _id(t)) for t in tags]
        if not conditions:
            return []

        combined = and_(*conditions) if match_all else or_(*conditions)
        query = self.session.query(FileRecord).filter(combined).order_by(FileRecord.id)
        return [self._context.files.hydrate(f) for f in query]

    #
    # Mutations
    #

    def attach_tag(self, file: Union[File, int], tag: Union[Tag, int]) -> File:
        """
        Tag a file.

        When file names carry their tags the file is renamed to include the
        new tag, e.g. report.txt -> report.Finance.txt. The link and the new
        path are committed together; if the rename fails the link is dropped
        again and FileRenameError is raised.

        Raises:
            DuplicateRelationError: the file already carries the tag
            MissingFileError / MissingTagError: unknown file or tag
            FileRenameError: the file could not be renamed
        """
        file_record = self._file_record(file)
        tag_record = self._tag_record(tag)

        if tag_record in file_record.tags:
            raise DuplicateRelationError(file_id=file_record.id, tag_id=tag_record.id)
        file_record.tags.append(tag_record)

        moves = []
        if self._context.encode_tags:
            target = FilenameTags.with_tag(
                file_record.path, tag_record.name, self._context.delimiter
            )
            moves.append((file_record, target))

        self._context.commit(moves)
        logger.debug(f"Attached tag {tag_record.id} to file {file_record.id}")
        return self._context.files.get_by_id(file_record.id)

    def detach_tag(self, file: Union[File, int], tag: Union[Tag, int]) -> File:
        """
        Remove a tag from a file. Detaching a tag the file does not carry only
        makes sure the tag is absent from the file name.

        Same rollback rules as attach_tag.
        """
        file_record = self._file_record(file)
        tag_record = self._tag_record(tag)

        if tag_record in file_record.tags:
            file_record.tags.remove(tag_record)

        moves = []
        if self._context.encode_tags:
            target = FilenameTags.without_tag(
                file_record.path, tag_record.name, self._context.delimiter
            )
            moves.append((file_record, target))

        self._context.commit(moves)
        logger.debug(f"Detached tag {tag_record.id} from file {file_record.id}")
        return self._context.files.get_by_id(file_record.id)
