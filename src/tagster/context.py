import os
import logging
from typing import Iterable, List, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .config import Config
from .errors import ConflictError, FileRenameError
from .files import FileCatalog
from .models import FileRecord
from .relations import RelationEngine
from .tags import TagCatalog
from .utils import move_file

logger = logging.getLogger(__name__)

# A file record together with the path it has to be moved to
Move = Tuple[FileRecord, str]


class CatalogContext:
    """Shared state of the tag, file and relation handlers.

    Every handler receives this context at construction and reaches the
    others through it. All three exist once the constructor returns.
    """

    def __init__(self, session: Session, config: Config):
        self.session = session
        self.config = config
        self.tags = TagCatalog(self)
        self.files = FileCatalog(self)
        self.relations = RelationEngine(self)

    @property
    def delimiter(self) -> str:
        return self.config.get_delimiter()

    @property
    def encode_tags(self) -> bool:
        return self.config.is_tag_encoding_enabled()

    def commit(self, moves: Iterable[Move] = ()):
        """
        Move files on disk, record their new paths and commit the session.

        Either everything is applied or the session is rolled back and the
        files already moved are put back. Failures to rename raise
        FileRenameError; conflicts on the stored path raise ConflictError.

        Args:
            moves: (file record, target path) pairs, pending in the session
        """
        done: List[Tuple[str, str]] = []
        try:
            for record, target in moves:
                if target == record.path:
                    continue
                move_file(record.path, target)
                done.append((record.path, target))
                record.path = target
            self.session.commit()
        except FileRenameError as e:
            self._revert(done)
            raise FileRenameError(
                source=e.source, target=e.target, reason=e.reason, rolled_back=True
            ) from e
        except IntegrityError as e:
            self._revert(done)
            raise ConflictError(reason=str(e.orig)) from e
        except SQLAlchemyError:
            self._revert(done)
            raise

        for source, target in done:
            logger.debug(f"Renamed {source} -> {target}")

    def _revert(self, done: List[Tuple[str, str]]):
        self.session.rollback()
        for source, target in reversed(done):
            try:
                os.rename(target, source)
            except OSError as e:
                # Database is back to the old paths but this file is not
                raise FileRenameError(
                    source=target, target=source, reason=str(e), rolled_back=False
                ) from e
