"""
Configuration file access.

The configuration file is an INI file.  Its location is taken from the
``TIDE_WATCH_CONFIG`` environment variable, or defaults to the file shipped
in ``tide_watch/conf``.
"""

import configparser
import os
from logging import Logger
from pathlib import Path
from typing import Optional

CONFIG_ENV_VAR = 'TIDE_WATCH_CONFIG'
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / 'conf' / 'tide_watch.conf'


class Utils:
    """Helpers shared by retrieval scripts."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(
            config_path
            or os.getenv(CONFIG_ENV_VAR)
            or DEFAULT_CONFIG_PATH
        )

    def read_config_section(self, section: str, logger: Logger) -> dict:
        """
        Read one section of the configuration file.

        Args:
            section: Section name, e.g. 'urls' or 'tide_engine'
            logger: Logger instance for logging messages

        Returns:
            Dictionary of the section's key/value pairs (values are strings)

        Raises:
            FileNotFoundError: If the configuration file does not exist
            KeyError: If the section is missing from the file
        """
        if not self.config_path.is_file():
            logger.error('Configuration file %s not found.', self.config_path)
            raise FileNotFoundError(
                f'Configuration file {self.config_path} not found.'
            )

        config = configparser.ConfigParser()
        config.read(self.config_path)

        if not config.has_section(section):
            logger.error(
                'Section [%s] missing from configuration file %s.',
                section, self.config_path)
            raise KeyError(
                f'Section [{section}] missing from {self.config_path}'
            )

        logger.debug('Read section [%s] from %s.', section, self.config_path)
        return dict(config.items(section))
