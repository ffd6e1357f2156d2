"""
Persisted user configuration.

Stores per-platform credentials and the default main branch name as JSON,
by default in ``~/.quickgit/config.json``.
"""

import json
import os
from pathlib import Path
from typing import Any, Protocol

from quickgit.exceptions import ConfigurationError
from quickgit.logging import get_logger
from quickgit.types.credentials import DEFAULT_BRANCH, PlatformCredentials, QuickGitConfig
from quickgit.types.request import Platform, Visibility

logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path.home() / ".quickgit" / "config.json"


class ConfigStoreProtocol(Protocol):
    """What the workflow needs from a configuration store."""

    def load(self) -> QuickGitConfig: ...

    def save(self, config: QuickGitConfig) -> None: ...

    def clear_credentials(self, platform: Platform) -> None: ...


class ConfigStore:
    """
    JSON file backed configuration store.

    Example:
        ```python
        from quickgit.config import ConfigStore

        store = ConfigStore.from_env()
        config = store.load()
        print(config.default_branch)
        ```
    """

    def __init__(self, path: str | Path = DEFAULT_CONFIG_PATH) -> None:
        """
        Initialize the store.

        Args:
            path: Location of the JSON config file
        """
        self.path = Path(path)

    @classmethod
    def from_env(cls) -> "ConfigStore":
        """
        Create a store from environment variables.

        Environment variables:
            QUICKGIT_CONFIG: Path to the config file (optional, default: ~/.quickgit/config.json)
        """
        path = os.environ.get("QUICKGIT_CONFIG")
        return cls(path) if path else cls()

    def load(self) -> QuickGitConfig:
        """
        Load the configuration; a missing file yields the defaults.

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        if not self.path.is_file():
            return QuickGitConfig()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot read config file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {self.path} must hold a JSON object")
        return config_from_dict(data)

    def save(self, config: QuickGitConfig) -> None:
        """
        Write the configuration, creating the parent directory if needed.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(config_to_dict(config), indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise ConfigurationError(f"Cannot write config file {self.path}: {e}") from e

    def clear_credentials(self, platform: Platform) -> None:
        """Reset the stored credentials of one platform to empty values."""
        config = self.load()
        config.platforms[Platform(platform)] = PlatformCredentials()
        self.save(config)
        logger.warning(f"Cleared stored credentials for {Platform(platform).display_name}")


def config_from_dict(data: dict[str, Any]) -> QuickGitConfig:
    """Build a QuickGitConfig from its JSON form."""
    config = QuickGitConfig(
        default_branch=data.get("defaultBranch") or DEFAULT_BRANCH,
    )

    visibility = data.get("defaultVisibility")
    if visibility:
        try:
            config.default_visibility = Visibility(visibility)
        except ValueError:
            raise ConfigurationError(f"Invalid defaultVisibility: {visibility}") from None

    platforms = data.get("platforms") or {}
    if not isinstance(platforms, dict):
        raise ConfigurationError("Config key 'platforms' must be a JSON object")

    for name, entry in platforms.items():
        try:
            platform = Platform(name)
        except ValueError:
            logger.warning(f"Ignoring unsupported platform in config: {name}")
            continue
        entry = entry or {}
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Config entry for platform {name} must be a JSON object")
        config.platforms[platform] = PlatformCredentials(
            username=entry.get("username", ""),
            token=entry.get("token", ""),
        )
    return config


def config_to_dict(config: QuickGitConfig) -> dict[str, Any]:
    """Convert a QuickGitConfig to its JSON form."""
    return {
        "defaultBranch": config.default_branch,
        "defaultVisibility": config.default_visibility.value,
        "platforms": {
            platform.value: {"username": creds.username, "token": creds.token}
            for platform, creds in config.platforms.items()
        },
    }
