"""Path lookup for UGF configuration.

The analyzer persists nothing; the only file it ever reads is an optional
config file. Its base directory can be overridden with UGF_HOME.

Default locations:
- Linux/macOS: ~/.ugf
- Windows: %USERPROFILE%\\.ugf
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "UGF_HOME"


@lru_cache(maxsize=1)
def get_ugf_home() -> Path:
    """Get the base directory for UGF configuration.

    Resolution order:
    1. UGF_HOME environment variable (if set)
    2. ~/.ugf
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser()
    return Path.home() / ".ugf"


def get_config_path() -> Path:
    """Get the path to the user config file."""
    return get_ugf_home() / "config.toml"
