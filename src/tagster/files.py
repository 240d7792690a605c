import os
import logging
from typing import Iterable, List, Optional, Union

from sqlalchemy.exc import IntegrityError

from .errors import ConflictError, DuplicateFileError, MissingFileError, MissingTagError
from .filename_tags import FilenameTags
from .models import FileRecord, TagRecord
from .objects import File, Tag

logger = logging.getLogger(__name__)


class FileCatalog:
    """Handles file-related database operations."""

    def __init__(self, context):
        self._context = context

    @property
    def session(self):
        return self._context.session

    def _record(self, file_id: int) -> Optional[FileRecord]:
        return self.session.query(FileRecord).filter_by(id=file_id).first()

    def hydrate(self, record: FileRecord) -> File:
        return File.from_record(record, self._context.relations.tags_for_file(record.id))

    def count(self) -> int:
        return self.session.query(FileRecord).count()

    def get_by_id(self, file_id: int) -> Optional[File]:
        """File with this id and its tags, or None."""
        record = self._record(file_id)
        return self.hydrate(record) if record else None

    def get_by_path(self, path: str) -> Optional[File]:
        record = self.session.query(FileRecord).filter_by(path=os.path.abspath(path)).first()
        return self.hydrate(record) if record else None

    def untagged(self) -> List[File]:
        """Registered files that carry no tag at all."""
        query = self.session.query(FileRecord).filter(~FileRecord.tags.any())
        return [self.hydrate(f) for f in query.order_by(FileRecord.id)]

    def _tag_record(self, tag: Union[Tag, int]) -> TagRecord:
        tag_id = tag.id if isinstance(tag, Tag) else tag
        record = self.session.query(TagRecord).filter_by(id=tag_id).first()
        if record is None:
            raise MissingTagError(tag_id=tag_id)
        return record

    def add(self, path: str, tags: Optional[Iterable[Union[Tag, int]]] = None) -> File:
        """
        Register a file, optionally attaching tags to it.

        The file row, its tag links and the rename that embeds the tags in
        the file name are committed together: if the rename fails nothing is
        registered and the file keeps its name.

        Args:
            path: Path of an existing file
            tags: Tags to attach, in order

        Returns:
            File: the registered file, with its final path and tags

        Raises:
            MissingFileError: `path` is not an existing file
            MissingTagError: one of `tags` does not exist
            DuplicateFileError: `path` is already registered
            FileRenameError: the file could not be renamed
        """
        path = os.path.abspath(path)
        if not os.path.isfile(path):
            raise MissingFileError(file=path)
        if self.session.query(FileRecord).filter_by(path=path).first() is not None:
            raise DuplicateFileError(path=path)

        tag_records = []
        for tag in tags or []:
            tag_record = self._tag_record(tag)
            if tag_record not in tag_records:
                tag_records.append(tag_record)

        target = path
        if self._context.encode_tags:
            for tag_record in tag_records:
                target = FilenameTags.with_tag(target, tag_record.name, self._context.delimiter)

        record = FileRecord(path=path)
        record.tags.extend(tag_records)
        self.session.add(record)
        try:
            self._context.commit([(record, target)])
        except ConflictError as e:
            raise DuplicateFileError(path=target) from e

        logger.debug(f"Added file {record.id} {record.path} with {len(tag_records)} tag(s)")
        return self.hydrate(record)

    def edit(self, file: File) -> File:
        """Store `file.path` as the path of file `file.id`. Nothing is moved on disk."""
        record = self._record(file.id)
        if record is None:
            raise MissingFileError(file=file.id)

        path = os.path.abspath(file.path)
        record.path = path
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateFileError(path=path) from e

        return self.get_by_id(file.id)

    def delete(self, file: Union[File, int]):
        """Forget a file and its tag links. The file on disk is left alone."""
        file_id = file.id if isinstance(file, File) else file
        record = self._record(file_id)
        if record is None:
            return
        self.session.delete(record)
        self.session.commit()
        logger.debug(f"Deleted file {file_id}")
