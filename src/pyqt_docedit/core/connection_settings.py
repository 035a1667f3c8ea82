"""
Persisted database connection settings.

Settings survive application restarts in a small JSON file. Username and
password are optional; empty values are stored as absent.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from pyqt_docedit.protocols.editor_config import get_editor_config

logger = logging.getLogger(__name__)

DEFAULT_HOST = "192.168.31.205"
DEFAULT_PORT = "27017"
DEFAULT_DATABASE = "mengyafarm"


def _none_if_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class ConnectionSettings:
    """Where the document store lives and how to authenticate.

    Attributes:
        host: Server address
        port: Server port (kept as text, as entered)
        database: Database name
        username: Optional user name
        password: Optional password
    """

    host: str = DEFAULT_HOST
    port: str = DEFAULT_PORT
    database: str = DEFAULT_DATABASE
    username: Optional[str] = None
    password: Optional[str] = None

    def __post_init__(self):
        self.host = self.host.strip()
        self.port = str(self.port).strip()
        self.database = self.database.strip()
        self.username = _none_if_blank(self.username)
        self.password = _none_if_blank(self.password)

    @property
    def has_credentials(self) -> bool:
        return self.username is not None and self.password is not None

    def connection_uri(self) -> str:
        """
        MongoDB connection URI.

        Credentials are percent-encoded and authenticate against the admin
        database.
        """
        if self.has_credentials:
            user = quote(self.username, safe="")
            password = quote(self.password, safe="")
            return f"mongodb://{user}:{password}@{self.host}:{self.port}/{self.database}?authSource=admin"
        return f"mongodb://{self.host}:{self.port}/{self.database}"

    def redacted_uri(self) -> str:
        """Connection URI safe for logs."""
        if self.has_credentials:
            return f"mongodb://{quote(self.username, safe='')}:***@{self.host}:{self.port}/{self.database}?authSource=admin"
        return self.connection_uri()


class ConnectionSettingsStore:
    """
    Load and save ConnectionSettings as JSON.

    A missing or unreadable file yields the defaults; save failures are logged
    and do not raise, so a read-only home directory never blocks editing.
    """

    def __init__(self, settings_file: Optional[Path] = None):
        if settings_file is None:
            config = get_editor_config()
            if config.settings_file:
                settings_file = Path(config.settings_file)
            else:
                settings_file = Path.home() / ".config" / "pyqt_docedit" / "connection.json"

        self.settings_file = Path(settings_file)
        logger.debug(f"ConnectionSettingsStore using {self.settings_file}")

    def load(self) -> ConnectionSettings:
        """Read saved settings, or defaults when nothing usable is saved."""
        try:
            if not self.settings_file.exists():
                logger.debug("No saved connection settings, using defaults")
                return ConnectionSettings()
            with open(self.settings_file, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load connection settings: {e}")
            return ConnectionSettings()

        if not isinstance(data, dict):
            logger.warning("Connection settings file does not hold an object, using defaults")
            return ConnectionSettings()

        defaults = ConnectionSettings()
        return ConnectionSettings(
            host=str(data.get("host") or defaults.host),
            port=str(data.get("port") or defaults.port),
            database=str(data.get("database") or defaults.database),
            username=data.get("username"),
            password=data.get("password"),
        )

    def save(self, settings: ConnectionSettings) -> bool:
        """Write settings to disk. Returns False if the file could not be written."""
        data = {key: value for key, value in asdict(settings).items() if value is not None}
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save connection settings: {e}")
            return False
        logger.debug(f"Saved connection settings for {settings.redacted_uri()}")
        return True
