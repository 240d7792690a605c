"""Entry point of a management system: one root directory, its config file and its database."""

import os
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .config import CONFIG_FILE, DATABASE_FILE, DEFAULT_DELIMITER, Config
from .context import CatalogContext
from .errors import (
    AlreadyInitialisedError,
    MalformedConfigError,
    MissingConfigError,
    MissingFileError,
    TagsterError,
    UninitialisedDatabaseError,
)
from .filename_tags import FilenameTags
from .models import init_db
from .objects import File
from .utils import walk_files

logger = logging.getLogger(__name__)


class InitialisationStatus(Enum):
    INITIALISED = "initialised"
    UNINITIALISED = "uninitialised"  # no config file
    MISSING_DATABASE = "missing_database"  # config file but no database
    BAD_CONFIG = "bad_config"  # config file cannot be parsed


@dataclass
class ImportFailure:
    path: str
    error: Union[TagsterError, OSError]


@dataclass
class ImportReport:
    imported: List[File] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # already registered
    failed: List[ImportFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class TagManager:
    """
    Tag management system rooted at one directory.

    Build one with `connect`, `initialise_new` or `initialise_existing`.
    The manager owns the database session; `tags`, `files` and `relations`
    share it.
    """

    def __init__(self, config: Config, session):
        self.config = config
        self.root = config.root
        self.session = session
        self.context = CatalogContext(session, config)
        self.import_report: Optional[ImportReport] = None

    @property
    def tags(self):
        return self.context.tags

    @property
    def files(self):
        return self.context.files

    @property
    def relations(self):
        return self.context.relations

    #
    # Opening a management system
    #

    @staticmethod
    def check_initialised(root: str) -> InitialisationStatus:
        """Report the state of `root` without raising."""
        try:
            config = Config(root)
        except MissingConfigError:
            return InitialisationStatus.UNINITIALISED
        except MalformedConfigError:
            return InitialisationStatus.BAD_CONFIG

        if not os.path.isfile(config.database_file):
            return InitialisationStatus.MISSING_DATABASE
        return InitialisationStatus.INITIALISED

    @classmethod
    def connect(cls, root: str) -> "TagManager":
        """
        Open the management system of an initialised directory.

        Raises:
            MissingConfigError: `root` has no config file
            MalformedConfigError: the config file cannot be parsed
            UninitialisedDatabaseError: the config file exists but the database does not
        """
        config = Config(root)
        if not os.path.isfile(config.database_file):
            raise UninitialisedDatabaseError(root=config.root, database_file=config.database_file)

        logger.debug(f"Connecting to {config.database_file}")
        return cls(config, init_db(config.database_file, create=False))

    @classmethod
    def initialise_new(cls, root: str, delimiter: str = DEFAULT_DELIMITER,
                       encode_tags: bool = True) -> "TagManager":
        """
        Turn `root` into a management system and import every file below it.

        Tags already embedded in file names are picked up. Per-file import
        failures do not stop the walk; they end up in `manager.import_report`.

        Raises:
            AlreadyInitialisedError: `root` already has a config file
        """
        root = cls._check_root(root)
        if Config.exists(root):
            raise AlreadyInitialisedError(root=root)

        config = Config.create(root, delimiter, encode_tags)
        return cls._build(config)

    @classmethod
    def initialise_existing(cls, root: str, delimiter: str = DEFAULT_DELIMITER,
                            encode_tags: bool = True) -> "TagManager":
        """
        Rebuild the database of a directory whose file names already carry tags.

        A config file left in `root` is reused as is (its delimiter wins over
        the arguments); otherwise a new one is written.

        Raises:
            AlreadyInitialisedError: `root` already has a database
            MalformedConfigError: the existing config file cannot be parsed
        """
        root = cls._check_root(root)
        config = Config.read_existing(root)
        if config is not None and os.path.isfile(config.database_file):
            raise AlreadyInitialisedError(root=root)

        if config is None:
            config = Config.create(root, delimiter, encode_tags)
        return cls._build(config)

    @staticmethod
    def _check_root(root: str) -> str:
        root = os.path.abspath(root)
        if not os.path.isdir(root):
            raise MissingFileError(file=root)
        return root

    @classmethod
    def _build(cls, config: Config) -> "TagManager":
        logger.debug(f"Creating database {config.database_file}")
        manager = cls(config, init_db(config.database_file, create=True))
        manager.import_report = manager.import_directory()
        return manager

    #
    # Import
    #

    def _management_files(self):
        database = os.path.join(self.root, DATABASE_FILE)
        return {
            os.path.join(self.root, CONFIG_FILE),
            database,
            database + '-journal',
            database + '-wal',
            database + '-shm',
        }

    def import_file(self, path: str, extract_tags: bool = True) -> File:
        """Register one file, creating and attaching the tags found in its name."""
        tags = []
        if extract_tags:
            for name in FilenameTags.tags_in(path, self.config.get_delimiter()):
                tags.append(self.tags.get_or_create(name))
        return self.files.add(path, tags)

    def import_directory(self, directory: Optional[str] = None,
                         extract_tags: bool = True) -> ImportReport:
        """
        Import every file below `directory` (the root by default).

        Files already registered are skipped. A file that cannot be imported
        is recorded in the report and the walk carries on.
        """
        report = ImportReport()
        directory = os.path.abspath(directory or self.root)

        for path in walk_files(directory, skip=self._management_files()):
            if self.files.get_by_path(path) is not None:
                report.skipped.append(path)
                continue
            try:
                report.imported.append(self.import_file(path, extract_tags))
            except (TagsterError, OSError) as e:
                logger.debug(f"Could not import {path}: {e}")
                report.failed.append(ImportFailure(path, e))

        logger.debug(
            f"Imported {len(report.imported)} file(s) from {directory}, "
            f"skipped {len(report.skipped)}, failed {len(report.failed)}"
        )
        return report

    #
    # Lifetime
    #

    def close(self):
        bind = self.session.get_bind()
        self.session.close()
        bind.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
