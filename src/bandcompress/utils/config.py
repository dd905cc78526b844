"""
Persisted settings for the compressor.

The settings are a small JSON record (output folder and collision policy)
read once at startup and written back whenever the user changes them from the
menu. Validation happens here, at load time: a missing or unusable output
folder is replaced by the platform default so the rest of the code can treat
`output_directory` as an existing folder.
"""
import json
import os
import platform
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bandcompress.utils import logger, LogLevel
from bandcompress.utils.constants import COLLISION_POLICIES, COLLISION_RENAME, CONFIG_PATH
from bandcompress.utils.errors import ConfigError


@dataclass
class CompressorConfig:
    output_directory: Path
    on_collision: str = COLLISION_RENAME

    def to_dict(self) -> dict:
        return {"output_directory": str(self.output_directory), "on_collision": self.on_collision}


def default_config_path() -> Path:
    """Location of the settings file: $BANDCOMPRESS_CONFIG, else the per-user config folder."""
    if CONFIG_PATH:
        return Path(CONFIG_PATH).expanduser()
    if platform.system() == "Windows" and os.getenv("APPDATA"):
        return Path(os.environ["APPDATA"]) / "bandcompress" / "config.json"
    return Path.home() / ".config" / "bandcompress" / "config.json"


def default_output_directory() -> Path:
    return Path.home() / "Videos" / "Compressed"


def ensure_directory(path: Path) -> Path:
    """Create `path` if needed and return it resolved; raise ConfigError if that fails."""
    path = Path(path).expanduser()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Output folder {path} cannot be created: {e}") from e
    if not path.is_dir():
        raise ConfigError(f"Output folder {path} is not a directory")
    return path.resolve()


def _read_raw(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not load or parse '{path}': {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"'{path}' does not contain a JSON object")
    return data


def load_config(path: Optional[Path] = None) -> CompressorConfig:
    """
    Load settings from `path` (default: `default_config_path()`), falling back to defaults.

    A missing file is normal on first start. A corrupt file, an output folder
    that no longer exists and an unknown collision policy are logged and
    replaced by their defaults; loading never fails because of them. Only a
    default output folder that cannot be created raises ConfigError.
    """
    path = path or default_config_path()
    data = {}
    if path.is_file():
        try:
            data = _read_raw(path)
        except ConfigError as e:
            logger.log("config.invalid", LogLevel.WARN, path=path, error=str(e))
    else:
        logger.log("config.missing", LogLevel.DEBUG, path=path)

    on_collision = data.get("on_collision", COLLISION_RENAME)
    if on_collision not in COLLISION_POLICIES:
        logger.log("config.invalid_policy", LogLevel.WARN, value=on_collision, default=COLLISION_RENAME)
        on_collision = COLLISION_RENAME

    output_directory = None
    configured = data.get("output_directory")
    if configured:
        candidate = Path(configured).expanduser()
        if candidate.is_dir():
            output_directory = candidate.resolve()
        else:
            logger.log("config.output_missing", LogLevel.WARN, path=candidate)

    if output_directory is None:
        output_directory = ensure_directory(default_output_directory())

    return CompressorConfig(output_directory=output_directory, on_collision=on_collision)


def save_config(config: CompressorConfig, path: Optional[Path] = None) -> Path:
    """Write `config` as JSON, replacing the previous file in one step."""
    path = path or default_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".config-", suffix=".json", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
        os.replace(tmp_name, path)
    except OSError as e:
        raise ConfigError(f"Could not write '{path}': {e}") from e
    logger.log("config.saved", LogLevel.DEBUG, path=path)
    return path
