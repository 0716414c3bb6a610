"""rccforge: incremental regeneration of rcc resource outputs.

Decides whether a generated resource source is stale, rebuilds it with the
external rcc tool when needed, and records a digest of the build options so
option changes trigger a rebuild just like timestamp changes do.

  - Ordered, short-circuiting staleness rules (mtimes + settings digest)
  - Settings record guarded by an exclusive lock across parallel jobs
  - Crash-safe: the record is cleared before rebuilding, rewritten after
  - Stable wrapper file for multi-configuration builds
"""

__version__ = "0.1.0"
__description__ = "Incremental regeneration engine for rcc resource outputs"

from rccforge.core.orchestrator import AutoRcc
from rccforge.cli.app import app as cli

__all__ = ["AutoRcc", "cli", "__version__"]
