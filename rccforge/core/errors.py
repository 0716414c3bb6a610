"""Error taxonomy for a regeneration run.

Every failure surfaced by rccforge derives from ``RccError`` so the CLI can
report it uniformly.  None of these are retried: the run aborts, the settings
lock is released, and the next invocation starts over.
"""

from __future__ import annotations

from rccforge.core._formatting import quoted_command


class RccError(RuntimeError):
    """Base class for all rccforge failures."""


class ConfigError(RccError):
    """A required manifest value is missing, empty or unparsable."""


class BuildIOError(RccError):
    """A file create/read/write/touch/mkdir operation failed.

    Also raised when a required input file (the ``.qrc`` file or one of its
    resources) does not exist.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.detail = message
        super().__init__(f"{path}: {message}")


class LockError(RccError):
    """The settings lock file could not be locked."""


class ToolInvocationError(RccError):
    """The generator (or its list mode) failed to launch or exited non-zero.

    Attributes
    ----------
    command:
        The argument vector that was executed.
    output:
        Captured stdout followed by stderr, verbatim.
    """

    def __init__(self, message: str, command: list[str], output: str = "") -> None:
        self.command = list(command)
        self.output = output
        text = f"{message}\nCommand\n-------\n{quoted_command(command)}"
        if output:
            text += f"\nOutput\n------\n{output}"
        super().__init__(text)
