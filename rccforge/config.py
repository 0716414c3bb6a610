"""Process-level configuration — env-driven.

Per-job values come from the manifest (see ``rccforge.core.manifest``).  This
module only holds knobs that apply to every invocation, read from
``RCCFORGE_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class RccforgeConfig(BaseSettings):
    """Environment overrides for rccforge runs.

    Examples
    --------
    Make every run verbose, as if the manifest requested it::

        export RCCFORGE_VERBOSITY=1

    Select the build configuration used for ``<KEY>_<CONFIG>`` lookups::

        export RCCFORGE_CONFIG=Release
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RCCFORGE_",
        env_file_encoding="utf-8",
    )

    log_level: str = "WARNING"

    # Raised to at least this value; the manifest can only increase it.
    verbosity: int = 0

    # Active build configuration for per-config manifest keys.
    config: str = ""

    manifest_encoding: str = "utf-8"
