import os
import json
import logging
from typing import Optional

from .errors import MalformedConfigError, MissingConfigError

CONFIG_FILE = ".tagster"
DATABASE_FILE = "database.db"
DEFAULT_DELIMITER = "&"

logger = logging.getLogger(__name__)


def validate_delimiter(delimiter: str) -> str:
    """Check a tag delimiter can be embedded in a file name."""
    if not isinstance(delimiter, str) or not delimiter:
        raise ValueError("Delimiter must be a non-empty string")
    if "." in delimiter or "/" in delimiter or os.sep in delimiter:
        raise ValueError(f"Delimiter '{delimiter}' cannot contain '.' or a path separator")
    return delimiter


class Config:
    def __init__(self, root: str):
        """Load the management system config stored in `root`.

        Raises MissingConfigError when the directory has no config file and
        MalformedConfigError when the file cannot be parsed.
        """
        self.root = os.path.abspath(root)
        self.config_file = os.path.join(self.root, CONFIG_FILE)
        self.config_data = self._load_config()

    @classmethod
    def create(cls, root: str, delimiter: str = DEFAULT_DELIMITER,
               encode_tags: bool = True) -> "Config":
        """Write a fresh config file into `root` and return it loaded."""
        config_file = os.path.join(os.path.abspath(root), CONFIG_FILE)
        data = {
            'delimiter': validate_delimiter(delimiter),
            'encode_tags': bool(encode_tags),
        }
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Wrote config file {config_file}")
        return cls(root)

    @staticmethod
    def exists(root: str) -> bool:
        return os.path.isfile(os.path.join(os.path.abspath(root), CONFIG_FILE))

    @property
    def database_file(self) -> str:
        return os.path.join(self.root, DATABASE_FILE)

    def _load_config(self) -> dict:
        """Load and validate the configuration file."""
        if not os.path.isfile(self.config_file):
            raise MissingConfigError(root=self.root, config_file=self.config_file)

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedConfigError(config_file=self.config_file, reason=str(e)) from e

        if not isinstance(config, dict):
            raise MalformedConfigError(
                config_file=self.config_file, reason="expected a JSON object"
            )

        # Older config files may only carry the delimiter
        config.setdefault('delimiter', DEFAULT_DELIMITER)
        config.setdefault('encode_tags', True)

        try:
            validate_delimiter(config['delimiter'])
        except ValueError as e:
            raise MalformedConfigError(config_file=self.config_file, reason=str(e)) from e

        return config

    def get_delimiter(self) -> str:
        """Get the delimiter separating tags inside a file name."""
        return self.config_data.get('delimiter', DEFAULT_DELIMITER)

    def is_tag_encoding_enabled(self) -> bool:
        """Whether file names are rewritten to carry their tags."""
        return bool(self.config_data.get('encode_tags', True))

    @staticmethod
    def read_existing(root: str) -> Optional["Config"]:
        """Return the config stored in `root`, or None when there is none."""
        if not Config.exists(root):
            return None
        return Config(root)
