"""Shared test fixtures for the assembly_bundler test suite.

WHY: Most test modules need a scratch build layout (input directory with
assemblies and configs, an output directory) and a way to read the
generated C arrays back as bytes.

HOW: Pytest fixtures build the layout under tmp_path. Helper functions
parse a generated .bundle.c file back into its arrays and struct lines,
and set explicit modification times so staleness tests never depend on
filesystem timestamp resolution.

RULES:
- All file I/O happens under tmp_path
- Timestamps are set with os.utime in whole seconds
"""

import os
import re
from pathlib import Path
from typing import Dict, List

import pytest

from assembly_bundler.config import BundleSettings
from assembly_bundler.core.symbols import DefaultSymbolProvider

_HEX_VALUE = re.compile(r"0x([0-9A-F]{2}),")


def set_mtime(path: Path, seconds: int) -> None:
    """Set both atime and mtime of ``path`` to ``seconds`` since the epoch."""
    ns = seconds * 1_000_000_000
    os.utime(path, ns=(ns, ns))


def mtime_ns(path: Path) -> int:
    return os.stat(path).st_mtime_ns


def array_lines(source: str, array_name: str) -> List[str]:
    """Return the value lines of ``array_name`` in generated source."""
    lines = source.split("\n")
    header = " {} [] = {{".format(array_name)
    start = next(i for i, line in enumerate(lines) if line.endswith(header))
    body = []
    for line in lines[start + 1:]:
        if line in ("};", "0};"):
            break
        body.append(line)
    return body


def decode_array(source: str, array_name: str) -> bytes:
    """Read the values of a generated array back into bytes."""
    values = []
    for line in array_lines(source, array_name):
        values.extend(int(v, 16) for v in _HEX_VALUE.findall(line))
    return bytes(values)


@pytest.fixture
def symbols():
    return DefaultSymbolProvider()


@pytest.fixture
def build_dirs(tmp_path) -> Dict[str, Path]:
    """An input directory and a not-yet-created output directory."""
    inputs = tmp_path / "bin"
    inputs.mkdir()
    return {"inputs": inputs, "output": tmp_path / "obj" / "bundles"}


@pytest.fixture
def settings(build_dirs):
    return BundleSettings(output_dir=build_dirs["output"], skip_unchanged=True)


@pytest.fixture
def make_assembly(build_dirs):
    """Factory writing an assembly file with the given bytes into bin/."""

    def _make(name: str = "App.dll", data: bytes = b"\x01\x02\x03") -> Path:
        path = build_dirs["inputs"] / name
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def make_config(build_dirs):
    """Factory writing a config file with the given text into bin/."""

    def _make(name: str = "App.dll.config", text: str = "<configuration/>") -> Path:
        path = build_dirs["inputs"] / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _make
