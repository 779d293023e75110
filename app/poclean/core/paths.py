"""XDG-compliant path management for poclean.

poclean keeps no state between runs. The only per-user file it reads is
an optional console theme under the XDG config directory.

XDG defaults:
- Config: ~/.config/poclean/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "poclean"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/poclean/ (or XDG_CONFIG_HOME/poclean/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_user_theme_path() -> Path:
    """Get the user theme override file path.

    Returns:
        Path to ~/.config/poclean/theme.toml.
    """
    return get_config_dir() / "theme.toml"
