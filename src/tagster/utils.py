import os
from typing import Collection, Iterator

from .errors import FileRenameError


def move_file(source: str, target: str):
    """Rename a file without ever replacing an existing one."""
    if os.path.exists(target):
        raise FileRenameError(
            source=source, target=target, reason="target already exists", rolled_back=False
        )
    try:
        os.rename(source, target)
    except OSError as e:
        raise FileRenameError(
            source=source, target=target, reason=str(e), rolled_back=False
        ) from e


def walk_files(directory: str, skip: Collection[str] = ()) -> Iterator[str]:
    """
    Yield the absolute path of every file below `directory`.

    Depth-first: the files of a directory come before its subdirectories,
    both in name order. Symbolic links are not followed.

    Args:
        directory: Directory to walk
        skip: Absolute file paths to leave out
    """
    directory = os.path.abspath(directory)
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    subdirectories = []
    for entry in entries:
        if entry.is_file(follow_symlinks=False):
            if entry.path not in skip:
                yield entry.path
        elif entry.is_dir(follow_symlinks=False):
            subdirectories.append(entry.path)

    for subdirectory in subdirectories:
        yield from walk_files(subdirectory, skip)
