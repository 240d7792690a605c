"""Read-only views of catalog rows handed out to callers."""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from .models import FileRecord, TagRecord


@dataclass(frozen=True)
class Tag:
    id: int
    created: datetime
    name: str
    colour: Optional[str] = None

    @classmethod
    def from_record(cls, record: TagRecord) -> "Tag":
        return cls(
            id=record.id,
            created=record.created,
            name=record.name,
            colour=record.colour,
        )


@dataclass
class TagUpdate:
    """Changes to apply to the tag `id` through TagCatalog.edit."""

    id: int
    name: str
    colour: Optional[str] = None

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagUpdate":
        return cls(id=tag.id, name=tag.name, colour=tag.colour)


def _file_time(path: str, attribute: str) -> Optional[datetime]:
    try:
        stat = os.stat(path)
    except OSError:
        return None
    return datetime.fromtimestamp(getattr(stat, attribute))


@dataclass(frozen=True)
class File:
    id: int
    added: datetime
    path: str
    tags: Tuple[Tag, ...] = field(default=())

    @classmethod
    def from_record(cls, record: FileRecord, tags) -> "File":
        return cls(id=record.id, added=record.added, path=record.path, tags=tuple(tags))

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def tag_names(self) -> Tuple[str, ...]:
        return tuple(tag.name for tag in self.tags)

    @property
    def created(self) -> Optional[datetime]:
        """Creation time reported by the OS, read on every access.

        Falls back to the inode change time where the platform does not
        record a birth time. None if the file is gone.
        """
        try:
            return datetime.fromtimestamp(os.stat(self.path).st_birthtime)
        except AttributeError:
            return _file_time(self.path, 'st_ctime')
        except OSError:
            return None

    @property
    def modified(self) -> Optional[datetime]:
        """Last modification time reported by the OS, read on every access."""
        return _file_time(self.path, 'st_mtime')

    def exists(self) -> bool:
        return os.path.isfile(self.path)
