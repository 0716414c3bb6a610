"""The immutable description of one regeneration job."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from rccforge.core.hasher import compute_settings_digest

MULTI_CONFIG_SUFFIX = "_CMAKE_"


def append_filename_suffix(filename: str, suffix: str) -> str:
    """Insert *suffix* before the last extension of *filename*.

    >>> append_filename_suffix("qrc_app.cpp", "_CMAKE_")
    'qrc_app_CMAKE_.cpp'
    >>> append_filename_suffix("qrc_app", "_CMAKE_")
    'qrc_app_CMAKE_'
    """
    stem, dot, ext = filename.rpartition(".")
    if not dot or not stem:
        return filename + suffix
    return f"{stem}{suffix}.{ext}"


class RccJob(BaseModel):
    """Everything a single run needs, resolved from the manifest.

    Path-like fields that feed the settings digest (executable, source,
    inputs) are kept as the exact strings the manifest supplied so the
    digest does not depend on path normalization.
    """

    model_config = ConfigDict(frozen=True)

    manifest_path: Path
    verbosity: int = 0
    multi_config: bool = False
    build_dir: Path
    include_dir: Path
    rcc_executable: str
    rcc_list_options: list[str] = []
    lock_file: Path
    source: str
    output_checksum: str = ""
    output_name: str
    options: list[str] = []
    inputs: list[str] = []
    settings_file: Path

    @property
    def is_verbose(self) -> bool:
        return self.verbosity > 0

    @property
    def multi_config_output(self) -> str:
        """Relative reference of the per-configuration output.

        ``<checksum>/<name with _CMAKE_ before the extension>``.
        """
        name = append_filename_suffix(self.output_name, MULTI_CONFIG_SUFFIX)
        return "/".join(part for part in (self.output_checksum, name) if part)

    @property
    def public_output(self) -> Path:
        """The stable path downstream consumers reference (the wrapper)."""
        return self.build_dir / self.output_checksum / self.output_name

    @property
    def output_path(self) -> Path:
        """The physical artifact written by the generator."""
        if self.multi_config:
            return self.include_dir / self.multi_config_output
        return self.public_output

    def settings_digest(self) -> str:
        """Digest of every option that influences the generated output."""
        return compute_settings_digest(
            executable=self.rcc_executable,
            list_options=self.rcc_list_options,
            source=self.source,
            output_checksum=self.output_checksum,
            output_name=self.output_name,
            options=self.options,
            inputs=self.inputs,
        )
