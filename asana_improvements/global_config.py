"""Global configuration storage for Asana Improvements.

Stores the enhancer configuration in ~/.asana_improvements/config.json and
the durable preferences in ~/.asana_improvements/state.json. Set
ASANA_IMPROVEMENTS_HOME to use another directory.
"""

import json
import os
from pathlib import Path

from pydantic import ValidationError

from .domain.shared.result import Err, Ok, Result
from .infrastructure.storage.json_store import JsonFileStore
from .models import EnhancerConfig

HOME_ENV_VAR = "ASANA_IMPROVEMENTS_HOME"
CONFIG_FILE = "config.json"
STATE_FILE = "state.json"


def get_config_dir() -> Path:
    """Get the configuration directory (not created here)."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".asana_improvements"


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE


def get_state_path() -> Path:
    return get_config_dir() / STATE_FILE


def load_config(path: Path | None = None) -> Result[EnhancerConfig, str]:
    """Load the enhancer configuration.

    A missing file yields the defaults.

    Returns:
        Ok(EnhancerConfig), or Err(str) if the file is unreadable or invalid.
    """
    config_file = path or get_config_path()
    if not config_file.exists():
        return Ok(EnhancerConfig())

    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
        return Ok(EnhancerConfig.model_validate(data))
    except json.JSONDecodeError as e:
        return Err(f"Invalid JSON in {config_file}: {e}")
    except ValidationError as e:
        return Err(f"Invalid configuration in {config_file}: {e}")
    except OSError as e:
        return Err(f"Error reading {config_file}: {e}")


def save_config(config: EnhancerConfig, path: Path | None = None) -> Result[None, str]:
    """Save the enhancer configuration."""
    config_file = path or get_config_path()
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(
            json.dumps(config.model_dump(), indent=2),
            encoding="utf-8",
        )
        return Ok(None)
    except OSError as e:
        return Err(f"Error writing {config_file}: {e}")


def get_state_store(path: Path | None = None) -> JsonFileStore:
    """Durable key/value store for preferences such as the hidden flag."""
    return JsonFileStore(path or get_state_path())
