"""Configuration constants, output naming, and .env loading.

WHY: Centralizes the values a build might want to tweak (output directory,
incremental skipping, log level) and the fixed naming conventions of the
generated files, so the emitter and generator never hardcode them.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values. BundleSettings is the explicit per-invocation
configuration handed to the generator; there is no global task state.

RULES:
- Output file for an assembly: {assembly file name}.bundle.c
- Config copy artifact: {derived name}.config next to the output
- Each C array line holds at most BYTES_PER_LINE values
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (where the tool is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Generated file naming
# ---------------------------------------------------------------------------

BUNDLE_SUFFIX = ".bundle.c"
"""Appended to the assembly file name, e.g. Foo.dll → Foo.dll.bundle.c."""

CONFIG_SUFFIX = ".config"
"""Appended to the derived name for config lookup and the config copy."""

BYTES_PER_LINE = 16
"""Values per emitted array line; keeps generated lines short and diffable."""

# ---------------------------------------------------------------------------
# Environment defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_DIR = os.getenv("ASSEMBLY_BUNDLER_OUTPUT_DIR", "obj/bundles")
DEFAULT_SKIP_UNCHANGED = os.getenv("ASSEMBLY_BUNDLER_SKIP_UNCHANGED", "true").lower() == "true"
DEFAULT_LOG_LEVEL = os.getenv("ASSEMBLY_BUNDLER_LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class BundleSettings:
    """Per-invocation settings for a bundle generation run.

    Attributes:
        output_dir: Directory receiving the .bundle.c files and config copies.
        skip_unchanged: Leave outputs alone when they are newer than their
                        inputs (see core.staleness.should_skip).
    """

    output_dir: Path
    skip_unchanged: bool = DEFAULT_SKIP_UNCHANGED

    def __post_init__(self) -> None:
        if not str(self.output_dir).strip():
            raise ValueError("Output directory must not be empty.")
        object.__setattr__(self, "output_dir", Path(self.output_dir))

    @classmethod
    def from_env(cls) -> "BundleSettings":
        """Build settings from ASSEMBLY_BUNDLER_* environment variables."""
        return cls(output_dir=Path(DEFAULT_OUTPUT_DIR), skip_unchanged=DEFAULT_SKIP_UNCHANGED)

    def output_path_for(self, assembly_path: Path) -> Path:
        return self.output_dir / "{}{}".format(assembly_path.name, BUNDLE_SUFFIX)

    def config_copy_path_for(self, name: str) -> Path:
        return self.output_dir / "{}{}".format(name, CONFIG_SUFFIX)
