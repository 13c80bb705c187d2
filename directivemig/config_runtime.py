"""Runtime configuration for dmig - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from directivemig.errors import ConfigConflictError, FileAccessError
from directivemig.utils.logging import logger

DEFAULT_CONFIG_NAME = "directivemig.json"
CONFIG_ENV_VAR = "DIRECTIVEMIG_CONFIG"

# Directives contain commas (compile-flags), so this list is newline separated
NEWLINE_SEPARATED = {("directives", "manual_directives")}

DEFAULTS = {
    "directives": {
        # Extra raw directive strings merged after automatic collection
        "manual_directives": [],
        "target": "x86_64-apple-darwin",
        "match_mode": "line",
    },
    "walk": {
        "extensions": [".rs"],
    },
    "report": {
        "progress_interval": 500,
    },
}


def default_config_path() -> Path:
    """Config path from $DIRECTIVEMIG_CONFIG, else ./directivemig.json."""
    return Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_NAME)


def load_runtime_config(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load runtime configuration from a JSON file and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (DIRECTIVEMIG_<SECTION>_<KEY>)
    2. The JSON config file
    3. Built-in defaults

    A missing file is not an error. An unreadable or invalid one is logged
    and ignored. Values whose type differs from the default are dropped.
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(path) if path is not None else default_config_path()
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
                            else:
                                logger.warning(
                                    "Ignoring config entry {section}.{key} in {path}",
                                    section=section,
                                    key=key,
                                    path=path,
                                )
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"DIRECTIVEMIG_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    default_value = cfg[section][key]
                    if isinstance(default_value, int):
                        cfg[section][key] = int(value)
                    elif (section, key) in NEWLINE_SEPARATED:
                        cfg[section][key] = [
                            v.removesuffix("\r") for v in value.split("\n") if v.strip()
                        ]
                    elif isinstance(default_value, list):
                        cfg[section][key] = [v.strip() for v in value.split(",") if v.strip()]
                    else:
                        cfg[section][key] = value
                except ValueError as e:
                    logger.warning(
                        f"Invalid value for environment variable {env_var}: '{value}' - {e}"
                    )
                    logger.info(f"Using default value: {cfg[section][key]}")

    return cfg


def write_default_config(path: str | Path) -> Path:
    """Write DEFAULTS as JSON to path. Refuses to overwrite an existing file."""
    path = Path(path)
    if path.exists():
        raise ConfigConflictError(path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # "x" so a file created concurrently is not clobbered either
        with open(path, "x", encoding="utf-8") as f:
            json.dump(DEFAULTS, f, indent=2)
            f.write("\n")
    except FileExistsError as e:
        raise ConfigConflictError(path) from e
    except OSError as e:
        raise FileAccessError(path, "write config", e) from e

    return path
