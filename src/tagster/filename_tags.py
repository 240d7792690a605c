"""Module for reading and writing tags embedded in file names.

A tagged name has the shape ``{base}.{tag1<delim>tag2...}.{extension}``.
The same rule is used when tags are attached or detached and when existing
names are imported.
"""

import os
from typing import List, NamedTuple, Optional


class ParsedName(NamedTuple):
    base: str
    block: Optional[List[str]]  # raw tag block entries, None when there is no block
    extension: Optional[str]  # None when the name has no period at all

    @property
    def tags(self) -> List[str]:
        return [entry for entry in self.block or [] if entry]


class FilenameTags:
    @staticmethod
    def parse(name: str, delimiter: str) -> ParsedName:
        """
        Split a file name into base name, tag block and extension.

        Examples with delimiter "&":
            "report.txt"              -> ("report", None, "txt")
            "report.Finance&Q1.txt"   -> ("report", ["Finance", "Q1"], "txt")
            "my.report.v2.pdf"        -> ("my.report", ["v2"], "pdf")
            "Makefile"                -> ("Makefile", None, None)

        The tag block is the text between the last two periods, so every
        entry is free of periods. Empty entries are kept in `block` so that
        the name can be written back unchanged; `tags` skips them.

        Args:
            name: File name without directory
            delimiter: Separator between tags inside the tag block

        Returns:
            ParsedName: base, tag block and extension
        """
        parts = name.split('.')
        if len(parts) == 1:
            return ParsedName(name, None, None)
        if len(parts) == 2:
            return ParsedName(parts[0], None, parts[1])

        base = '.'.join(parts[:-2])
        return ParsedName(base, parts[-2].split(delimiter), parts[-1])

    @staticmethod
    def compose(parsed: ParsedName, delimiter: str) -> str:
        """Inverse of parse. A name left without tag block drops an empty extension."""
        pieces = [parsed.base]
        if parsed.block:
            pieces.append(delimiter.join(parsed.block))
            # Keep a trailing period so the block is not read back as an extension
            pieces.append(parsed.extension or '')
        elif '.' in parsed.base:
            # An empty block stops the end of the base being read as tags
            pieces.append('')
            pieces.append(parsed.extension or '')
        elif parsed.extension:
            pieces.append(parsed.extension)
        return '.'.join(pieces)

    @staticmethod
    def tags_in(path: str, delimiter: str) -> List[str]:
        """Tag names embedded in the file name of `path`, without duplicates."""
        tags = FilenameTags.parse(os.path.basename(path), delimiter).tags
        return list(dict.fromkeys(tags))

    @staticmethod
    def with_tag(path: str, tag: str, delimiter: str) -> str:
        """Path of `path` once `tag` is embedded in its name."""
        directory, name = os.path.split(path)
        parsed = FilenameTags.parse(name, delimiter)
        if tag in parsed.tags:
            return path
        parsed = parsed._replace(block=(parsed.block or []) + [tag])
        return os.path.join(directory, FilenameTags.compose(parsed, delimiter))

    @staticmethod
    def without_tag(path: str, tag: str, delimiter: str) -> str:
        """Path of `path` once `tag` is removed from its name."""
        directory, name = os.path.split(path)
        parsed = FilenameTags.parse(name, delimiter)
        if tag not in parsed.tags:
            return path
        parsed = parsed._replace(block=[entry for entry in parsed.block if entry != tag])
        return os.path.join(directory, FilenameTags.compose(parsed, delimiter))

    @staticmethod
    def renamed_tag(path: str, old: str, new: str, delimiter: str) -> str:
        """Path of `path` once tag `old` is renamed to `new` in its name."""
        directory, name = os.path.split(path)
        parsed = FilenameTags.parse(name, delimiter)
        if old not in parsed.tags:
            return path
        block = []
        for entry in parsed.block:
            entry = new if entry == old else entry
            if entry and entry in block:
                continue
            block.append(entry)
        parsed = parsed._replace(block=block)
        return os.path.join(directory, FilenameTags.compose(parsed, delimiter))

    @staticmethod
    def check_tag_name(name: str, delimiter: str) -> Optional[str]:
        """Return why `name` cannot be embedded in a file name, or None if it can."""
        if not name:
            return "name is empty"
        if '.' in name:
            return "name contains a period"
        if delimiter in name:
            return f"name contains the tag delimiter '{delimiter}'"
        if '/' in name or os.sep in name:
            return "name contains a path separator"
        return None
