import logging
from typing import List, Optional, Union

from sqlalchemy.exc import IntegrityError

from .errors import DuplicateTagError, InvalidTagNameError, MissingTagError
from .filename_tags import FilenameTags
from .models import TagRecord
from .objects import Tag, TagUpdate

logger = logging.getLogger(__name__)


class TagCatalog:
    """Handles tag-related database operations."""

    def __init__(self, context):
        self._context = context

    @property
    def session(self):
        return self._context.session

    def _record(self, tag_id: int) -> Optional[TagRecord]:
        return self.session.query(TagRecord).filter_by(id=tag_id).first()

    def _check_name(self, name: str):
        reason = FilenameTags.check_tag_name(name, self._context.delimiter)
        if reason:
            raise InvalidTagNameError(name=name, reason=reason)

    def count(self) -> int:
        return self.session.query(TagRecord).count()

    def all(self) -> List[Tag]:
        return [Tag.from_record(t) for t in self.session.query(TagRecord).order_by(TagRecord.name)]

    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        """Tag with this id, or None."""
        record = self._record(tag_id)
        return Tag.from_record(record) if record else None

    def get_by_name(self, name: str) -> Optional[Tag]:
        """Tag with exactly this name, or None."""
        record = self.session.query(TagRecord).filter_by(name=name).first()
        return Tag.from_record(record) if record else None

    def find_similar(self, text: str) -> List[Tag]:
        """Tags whose name contains `text`, compared with the storage collation."""
        query = self.session.query(TagRecord).filter(
            TagRecord.name.contains(text, autoescape=True)
        )
        return [Tag.from_record(t) for t in query.order_by(TagRecord.id)]

    def create(self, name: str, colour: Optional[str] = None) -> Tag:
        """Add a new tag to the database."""
        self._check_name(name)

        record = TagRecord(name=name, colour=colour)
        self.session.add(record)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateTagError(name=name) from e

        logger.debug(f"Created tag {record.id} '{name}'")
        return Tag.from_record(record)

    def get_or_create(self, name: str, colour: Optional[str] = None) -> Tag:
        return self.get_by_name(name) or self.create(name, colour)

    def edit(self, update: TagUpdate) -> Tag:
        """
        Apply a TagUpdate to the stored tag.

        When file names carry their tags, every file with this tag is renamed
        so that its name follows the new tag name.

        Raises:
            MissingTagError: no tag has this id
            DuplicateTagError: another tag already uses the new name
            FileRenameError: a tagged file could not be renamed
        """
        record = self._record(update.id)
        if record is None:
            raise MissingTagError(tag_id=update.id)

        old_name = record.name
        renamed = update.name != old_name
        if renamed:
            self._check_name(update.name)
            clash = (
                self.session.query(TagRecord)
                .filter(TagRecord.name == update.name, TagRecord.id != update.id)
                .first()
            )
            if clash:
                raise DuplicateTagError(name=update.name)

        moves = []
        if renamed and self._context.encode_tags:
            delimiter = self._context.delimiter
            moves = [
                (f, FilenameTags.renamed_tag(f.path, old_name, update.name, delimiter))
                for f in record.files
            ]

        record.name = update.name
        record.colour = update.colour
        self._context.commit(moves)

        return self.get_by_id(update.id)

    def delete(self, tag: Union[Tag, int]):
        """
        Delete a tag and every link to it. Unknown ids are ignored.

        When file names carry their tags, the tag is first removed from the
        name of every file that has it.
        """
        tag_id = tag.id if isinstance(tag, Tag) else tag
        record = self._record(tag_id)
        if record is None:
            return

        moves = []
        if self._context.encode_tags:
            delimiter = self._context.delimiter
            moves = [
                (f, FilenameTags.without_tag(f.path, record.name, delimiter))
                for f in record.files
            ]

        self.session.delete(record)
        self._context.commit(moves)
        logger.debug(f"Deleted tag {tag_id}")
