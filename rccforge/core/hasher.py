"""Settings digest helpers.

The digest fingerprints everything that influences the generated output
besides file timestamps.  Two jobs with the same digest are considered to
have an identical configuration.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

# Cannot appear in normal paths or options, so field boundaries stay unambiguous.
SETTINGS_SEPARATOR = " ~~~ "
LIST_SEPARATOR = ";"


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def canonical_settings_string(
    *,
    executable: str,
    list_options: Sequence[str],
    source: str,
    output_checksum: str,
    output_name: str,
    options: Sequence[str],
    inputs: Sequence[str],
) -> str:
    """Join the settings fields in their fixed order.

    List fields keep their order; each field is followed by the separator.
    """
    fields = [
        executable,
        LIST_SEPARATOR.join(list_options),
        source,
        output_checksum,
        output_name,
        LIST_SEPARATOR.join(options),
        LIST_SEPARATOR.join(inputs),
    ]
    return "".join(f"{field}{SETTINGS_SEPARATOR}" for field in fields)


def compute_settings_digest(
    *,
    executable: str,
    list_options: Sequence[str],
    source: str,
    output_checksum: str,
    output_name: str,
    options: Sequence[str],
    inputs: Sequence[str],
) -> str:
    """SHA-256 hex digest of the canonical settings string."""
    text = canonical_settings_string(
        executable=executable,
        list_options=list_options,
        source=source,
        output_checksum=output_checksum,
        output_name=output_name,
        options=options,
        inputs=inputs,
    )
    return sha256_hex(text.encode("utf-8"))
