"""Project Launcher configuration management.

Handles persistent settings stored in ~/.project-launcher/config.json
"""

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

# Default configuration values
DEFAULT_THEME = "textual-dark"
DEFAULT_CATALOG_RELPATH = ".local/bin/project-launcher.json"
DEFAULT_STATUS_DURATION = 3.0
DEFAULT_MOUNT_ROOT = "/mnt"
DEFAULT_NATIVE_SHELL = "bash"
DEFAULT_FOREIGN_SHELL = "powershell.exe"
DEFAULT_FOREIGN_CMD = "cmd.exe"
DEFAULT_EXPORT_FORMAT = "yaml"  # yaml, json


class HomeDirectoryError(RuntimeError):
    """Raised when the user's home directory cannot be resolved."""


def home_dir() -> Path:
    """Resolve the user's home directory.

    Raises:
        HomeDirectoryError: If neither $HOME nor the password database
            yields a home directory.
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError(f"cannot resolve home directory: {e}") from e


@dataclass
class ViewState:
    """Persistent view state for the dashboard."""

    # Last highlighted project (by name)
    last_project: Optional[str] = None

    # Horizontal column scroll offset
    scroll_offset: int = 0


@dataclass
class LauncherConfig:
    """Project Launcher application configuration."""

    # Catalog location; None means ~/.local/bin/project-launcher.json
    catalog_path: Optional[str] = None

    # Appearance
    theme: str = DEFAULT_THEME
    status_duration: float = DEFAULT_STATUS_DURATION

    # Host translation (WSL2 interop)
    mount_root: str = DEFAULT_MOUNT_ROOT
    native_shell: str = DEFAULT_NATIVE_SHELL
    foreign_shell: str = DEFAULT_FOREIGN_SHELL
    foreign_cmd: str = DEFAULT_FOREIGN_CMD

    # Export preferences
    export_format: str = DEFAULT_EXPORT_FORMAT

    # View state - stores last dashboard state for restoration
    view_state: Optional[ViewState] = None

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the path to the config file."""
        return home_dir() / ".project-launcher" / "config.json"

    @classmethod
    def load(cls) -> "LauncherConfig":
        """Load configuration from file, or return defaults if not found."""
        config_path = cls.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                # Only use known fields to avoid issues with old config versions
                known_fields = {f.name for f in cls.__dataclass_fields__.values()}
                filtered_data = {k: v for k, v in data.items() if k in known_fields}

                # Handle nested ViewState
                if filtered_data.get("view_state") is not None:
                    view_state_data = filtered_data["view_state"]
                    if isinstance(view_state_data, dict):
                        view_state_fields = {f.name for f in ViewState.__dataclass_fields__.values()}
                        filtered_view_state = {k: v for k, v in view_state_data.items() if k in view_state_fields}
                        filtered_data["view_state"] = ViewState(**filtered_view_state)
                    else:
                        filtered_data["view_state"] = None

                return cls(**filtered_data)
            except (json.JSONDecodeError, AttributeError, TypeError, ValueError, OSError):
                logger.warning("Ignoring unreadable config file %s", config_path)

        return cls()

    def save(self) -> None:
        """Save configuration to file."""
        config_path = self.get_config_path()

        # Ensure directory exists
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)

    def resolve_catalog_path(self) -> Path:
        """Get the catalog file path, falling back to the default location."""
        if self.catalog_path:
            return Path(self.catalog_path).expanduser()
        return home_dir() / DEFAULT_CATALOG_RELPATH

    def save_view_state(
        self,
        last_project: Optional[str] = None,
        scroll_offset: int = 0,
    ) -> None:
        """Save the current view state for restoration on next launch."""
        self.view_state = ViewState(
            last_project=last_project,
            scroll_offset=scroll_offset,
        )
        self.save()
