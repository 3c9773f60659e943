"""Configuration management for gitshim.

Settings live in ~/.config/gitshim/settings.json. Environment variables
override the file:
- GITSHIM_GIT: git executable name or path
- GITSHIM_QUIET: suppress git's stderr passthrough in the CLI
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel

GIT_ENV_VAR = "GITSHIM_GIT"
QUIET_ENV_VAR = "GITSHIM_QUIET"

_TRUTHY = {"1", "true", "yes", "on"}


class GitshimConfig(BaseModel):
    """Configuration for gitshim."""

    # Executable to run instead of the "git" found on PATH
    git: str | None = None

    # Don't echo git's stderr when a command fails
    quiet: bool = False


def get_config_path() -> Path:
    """Get the user-level config file path."""
    return Path.home() / ".config" / "gitshim" / "settings.json"


def load_config_file(path: Path) -> GitshimConfig:
    """Load config from a JSON file.

    Returns empty config if file doesn't exist or is invalid.
    """
    if not path.exists():
        return GitshimConfig()

    try:
        data = json.loads(path.read_text())
        return GitshimConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError):
        return GitshimConfig()


def save_config_file(path: Path, config: GitshimConfig) -> None:
    """Save config to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.model_dump(), indent=2) + "\n")


def apply_env(config: GitshimConfig) -> GitshimConfig:
    """Return a copy of config with environment overrides applied."""
    updates: dict[str, object] = {}
    git = os.environ.get(GIT_ENV_VAR)
    if git:
        updates["git"] = git
    quiet = os.environ.get(QUIET_ENV_VAR)
    if quiet:
        updates["quiet"] = quiet.strip().lower() in _TRUTHY
    return config.model_copy(update=updates)


def load_config(path: Path | None = None) -> GitshimConfig:
    """Load the settings file and apply environment overrides."""
    return apply_env(load_config_file(path or get_config_path()))
