"""Shared test fixtures for rccforge."""

from __future__ import annotations

import json
import os
import stat
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from rccforge.config import RccforgeConfig
from rccforge.core.manifest import load_job
from rccforge.models.job import RccJob

# All inputs are stamped with this mtime so freshly written outputs are newer.
BASE_TIME_NS = 1_700_000_000 * 1_000_000_000

_WRAPPER_TEMPLATE = """#!/bin/sh
exec '{python}' '{script}' "$@"
"""

_FAKE_RCC_TEMPLATE = '''import json
import sys

args = sys.argv[1:]
with open({calls!r}, "a", encoding="utf-8") as fh:
    fh.write(json.dumps(args) + "\\n")

if "--list" in args:
    for name in {list_files!r}:
        print(name)
    for line in {list_stderr!r}:
        sys.stderr.write(line + "\\n")
    sys.exit({list_exit})

out = args[args.index("-o") + 1]
with open(out, "w", encoding="utf-8") as fh:
    fh.write("// generated from " + args[-1] + "\\n")
if {stdout!r}:
    sys.stdout.write({stdout!r})
if {stderr!r}:
    sys.stderr.write({stderr!r})
sys.exit({exit_code})
'''


def set_mtime(path: Path | str, offset_seconds: int = 0) -> int:
    """Stamp *path* with ``BASE_TIME_NS + offset_seconds``.  Returns the ns value."""
    ns = BASE_TIME_NS + offset_seconds * 1_000_000_000
    os.utime(path, ns=(ns, ns))
    return ns


def mtime_ns(path: Path | str) -> int:
    return os.stat(path).st_mtime_ns


def read_calls(calls_file: Path) -> list[list[str]]:
    """Argument vectors recorded by the fake rcc, in order."""
    if not calls_file.exists():
        return []
    return [json.loads(line) for line in calls_file.read_text().splitlines() if line]


class FakeRcc:
    """A scripted stand-in for the rcc executable."""

    def __init__(self, path: Path, calls_file: Path) -> None:
        self.path = path
        self.script = path.with_suffix(".py")
        self.calls_file = calls_file
        path.write_text(_WRAPPER_TEMPLATE.format(python=sys.executable, script=self.script))
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def configure(
        self,
        *,
        exit_code: int = 0,
        stdout: str = "",
        stderr: str = "",
        list_files: list[str] | None = None,
        list_stderr: list[str] | None = None,
        list_exit: int = 0,
    ) -> FakeRcc:
        """Rewrite the script behind the executable; the executable's mtime is unchanged."""
        self.script.write_text(
            _FAKE_RCC_TEMPLATE.format(
                calls=str(self.calls_file),
                list_files=list(list_files or []),
                list_stderr=list(list_stderr or []),
                list_exit=list_exit,
                stdout=stdout,
                stderr=stderr,
                exit_code=exit_code,
            )
        )
        return self

    @property
    def calls(self) -> list[list[str]]:
        return read_calls(self.calls_file)

    def build_calls(self) -> list[list[str]]:
        return [c for c in self.calls if "--list" not in c]

    def list_calls(self) -> list[list[str]]:
        return [c for c in self.calls if "--list" in c]


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def fake_rcc(tmp_dir: Path) -> FakeRcc:
    """Provide an executable fake rcc that succeeds and records its calls."""
    bin_dir = tmp_dir / "bin"
    bin_dir.mkdir()
    rcc = FakeRcc(bin_dir / "rcc", tmp_dir / "rcc_calls.jsonl")
    rcc.configure()
    set_mtime(rcc.path)
    return rcc


@pytest.fixture
def source_tree(tmp_dir: Path) -> dict[str, Path]:
    """A .qrc file with two resources, all stamped with the base mtime."""
    src = tmp_dir / "src"
    (src / "res").mkdir(parents=True)
    icon = src / "res" / "icon.png"
    logo = src / "res" / "logo.png"
    icon.write_bytes(b"\x89PNG icon")
    logo.write_bytes(b"\x89PNG logo")
    qrc = src / "app.qrc"
    qrc.write_text(
        "<RCC>\n"
        '  <qresource prefix="/">\n'
        "    <file>res/icon.png</file>\n"
        '    <file alias="logo">res/logo.png</file>\n'
        "  </qresource>\n"
        "</RCC>\n"
    )
    for path in (icon, logo, qrc):
        set_mtime(path)
    return {"qrc": qrc, "icon": icon, "logo": logo}


@pytest.fixture
def make_manifest(
    tmp_dir: Path, fake_rcc: FakeRcc, source_tree: dict[str, Path]
) -> Callable[..., Path]:
    """Factory fixture: write a JSON manifest with sensible defaults."""
    build_dir = tmp_dir / "build"
    build_dir.mkdir(exist_ok=True)

    def _factory(**overrides: Any) -> Path:
        defaults: dict[str, Any] = {
            "ARCC_VERBOSITY": 0,
            "ARCC_MULTI_CONFIG": False,
            "ARCC_BUILD_DIR": str(build_dir),
            "ARCC_INCLUDE_DIR": str(build_dir / "include"),
            "ARCC_RCC_EXECUTABLE": str(fake_rcc.path),
            "ARCC_RCC_LIST_OPTIONS": ["--list"],
            "ARCC_LOCK_FILE": str(build_dir / "AutoRcc_app.lock"),
            "ARCC_SOURCE": str(source_tree["qrc"]),
            "ARCC_OUTPUT_CHECKSUM": "a1b2",
            "ARCC_OUTPUT_NAME": "qrc_app.cpp",
            "ARCC_OPTIONS": ["--name", "app"],
            "ARCC_INPUTS": [str(source_tree["icon"]), str(source_tree["logo"])],
            "ARCC_SETTINGS_FILE": str(build_dir / "AutoRcc_app_Used.txt"),
        }
        defaults.update(overrides)
        defaults = {k: v for k, v in defaults.items() if v is not None}
        path = build_dir / "AutoRccInfo.json"
        path.write_text(json.dumps(defaults, indent=2))
        set_mtime(path)
        return path

    return _factory


@pytest.fixture
def make_job(make_manifest: Callable[..., Path]) -> Callable[..., RccJob]:
    """Factory fixture: write a manifest and load it into an RccJob."""

    def _factory(config: str | None = None, **overrides: Any) -> RccJob:
        return load_job(make_manifest(**overrides), config, settings=RccforgeConfig())

    return _factory


@pytest.fixture
def job(make_job: Callable[..., RccJob]) -> RccJob:
    """Convenience: a single-configuration job with explicit inputs."""
    return make_job()


@pytest.fixture
def stamp() -> Callable[..., int]:
    """Provide ``set_mtime(path, offset_seconds)`` relative to the base time."""
    return set_mtime


@pytest.fixture
def mtime() -> Callable[[Path | str], int]:
    """Provide ``mtime_ns(path)``."""
    return mtime_ns
