"""Manifest loading — turns a JSON info file into an ``RccJob``.

The manifest is written by the build system generator, one per resource
target.  Keys follow the ``ARCC_*`` naming.  Configuration-sensitive keys may
be overridden per build configuration by a ``<KEY>_<CONFIG>`` entry.

Lists may be JSON arrays or ``;``-separated strings.  Booleans may be JSON
booleans or the usual build-system truthy strings (``ON``, ``YES``, ...).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from rccforge.config import RccforgeConfig
from rccforge.core._formatting import quoted
from rccforge.core.errors import ConfigError
from rccforge.core.file_time import FileTime
from rccforge.models.job import RccJob

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"ON", "1", "YES", "TRUE", "Y"}


def is_on(value: Any) -> bool:
    """Interpret a manifest value as a boolean, build-system style."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if value is None:
        return False
    text = str(value).strip()
    if text.upper() in _TRUE_WORDS:
        return True
    try:
        return float(text) != 0
    except ValueError:
        return False


def expand_list(value: Any) -> list[str]:
    """Return a manifest value as a list, dropping empty elements."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        items = str(value).split(";")
    return [item for item in items if item]


def parse_verbosity(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return int(value)
    try:
        return max(int(str(value).strip()), 0)
    except ValueError:
        return 1 if is_on(value) else 0


class Manifest:
    """Key lookup over a parsed manifest, with per-configuration overrides."""

    def __init__(self, path: Path, data: dict[str, Any], config: str = "") -> None:
        self.path = path
        self._data = data
        self._config = config

    def get(self, key: str) -> str:
        value = self._data.get(key)
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ";".join(str(v) for v in value)
        return str(value)

    def get_raw(self, key: str) -> Any:
        return self._data.get(key)

    def get_list(self, key: str) -> list[str]:
        return expand_list(self._data.get(key))

    def _config_key(self, key: str) -> str:
        if self._config:
            per_config = f"{key}_{self._config}"
            if per_config in self._data:
                return per_config
        return key

    def get_config(self, key: str) -> str:
        """Value of ``<key>_<config>`` if present, else of ``<key>``."""
        return self.get(self._config_key(key))

    def get_config_list(self, key: str) -> list[str]:
        return self.get_list(self._config_key(key))

    def error(self, message: str) -> ConfigError:
        return ConfigError(f"In {quoted(str(self.path))}:\n{message}")


def read_manifest(
    path: str | Path, config: str = "", encoding: str = "utf-8"
) -> Manifest:
    """Read and parse the manifest file.

    Raises
    ------
    ConfigError
        If the file cannot be read or is not a JSON object.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding=encoding))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Manifest %s unreadable: %s", path, exc)
        raise ConfigError(
            f"In {quoted(str(path))}:\nFile processing failed."
        ) from exc
    if not isinstance(data, dict):
        raise ConfigError(
            f"In {quoted(str(path))}:\nFile processing failed. Expected a JSON object."
        )
    return Manifest(path, data, config)


def load_job(
    path: str | Path,
    config: str | None = None,
    *,
    settings: RccforgeConfig | None = None,
) -> RccJob:
    """Load the manifest at *path* and validate it into an ``RccJob``.

    Parameters
    ----------
    path:
        The JSON manifest.
    config:
        Build configuration name for ``<KEY>_<CONFIG>`` overrides.  Defaults
        to ``RccforgeConfig.config``.
    settings:
        Process-level configuration.  A fresh ``RccforgeConfig`` is read
        from the environment when omitted.
    """
    settings = settings or RccforgeConfig()
    if config is None:
        config = settings.config
    manifest = read_manifest(path, config, settings.manifest_encoding)

    verbosity = max(parse_verbosity(manifest.get_raw("ARCC_VERBOSITY")), settings.verbosity)
    multi_config = is_on(manifest.get_raw("ARCC_MULTI_CONFIG"))

    build_dir = manifest.get("ARCC_BUILD_DIR")
    if not build_dir:
        raise manifest.error("Build directory empty.")

    include_dir = manifest.get_config("ARCC_INCLUDE_DIR")
    if not include_dir:
        raise manifest.error("Include directory empty.")

    rcc_executable = manifest.get("ARCC_RCC_EXECUTABLE")
    if not rcc_executable:
        raise manifest.error("rcc executable missing.")
    if not FileTime().load(rcc_executable):
        raise manifest.error(
            f"The rcc executable {quoted(rcc_executable)} does not exist."
        )

    lock_file = manifest.get("ARCC_LOCK_FILE")
    if not lock_file:
        raise manifest.error("Lock file name missing.")

    settings_file = manifest.get_config("ARCC_SETTINGS_FILE")
    if not settings_file:
        raise manifest.error("Settings file name missing.")

    source = manifest.get("ARCC_SOURCE")
    if not source:
        raise manifest.error("rcc input file missing.")

    output_name = manifest.get("ARCC_OUTPUT_NAME")
    if not output_name:
        raise manifest.error("rcc output file missing.")

    return RccJob(
        manifest_path=manifest.path,
        verbosity=verbosity,
        multi_config=multi_config,
        build_dir=Path(build_dir),
        include_dir=Path(include_dir),
        rcc_executable=rcc_executable,
        rcc_list_options=manifest.get_list("ARCC_RCC_LIST_OPTIONS"),
        lock_file=Path(lock_file),
        source=source,
        output_checksum=manifest.get("ARCC_OUTPUT_CHECKSUM"),
        output_name=output_name,
        options=manifest.get_config_list("ARCC_OPTIONS"),
        inputs=manifest.get_list("ARCC_INPUTS"),
        settings_file=Path(settings_file),
    )
