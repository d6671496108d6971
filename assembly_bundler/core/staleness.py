"""Incremental build check: can an existing bundle be left as it is?

WHY: Regenerating every .bundle.c on every build forces the native
compiler to rebuild large data arrays. When neither the assembly nor its
config changed, the previous output is still correct and can be kept.

HOW: Compare last-write times. The config file's own path has no fixed
relation to the output, so the comparison for configs goes through the
config copy artifact that the emitter leaves next to the output; its
timestamp records when that config content was last bundled.

RULES:
- Skip only when skipping is enabled AND output and assembly both exist
  AND the output is not older than the assembly
- Config must agree with the copy artifact: no config and no copy, or a
  config and a copy that is not older than the config
- Any error reading metadata means "regenerate"
- No side effects
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def _mtime(path: Path) -> int:
    return os.stat(path).st_mtime_ns


def _config_is_current(config_path: Optional[Path], config_copy_path: Path) -> bool:
    copy_exists = config_copy_path.exists()
    if config_path is None:
        return not copy_exists
    if not copy_exists:
        return False
    return _mtime(config_copy_path) >= _mtime(config_path)


def should_skip(
    assembly_path: Path,
    output_path: Path,
    config_path: Optional[Path],
    config_copy_path: Path,
    skip_enabled: bool,
) -> bool:
    """Decide whether regeneration of ``output_path`` can be skipped.

    Args:
        assembly_path: The input assembly.
        output_path: The previously generated .bundle.c file.
        config_path: The config resolved for this run, or None.
        config_copy_path: Where the last bundled config was copied to.
        skip_enabled: The SkipUnchanged switch of the invocation.

    Returns:
        True only when the existing output is provably up to date.
    """
    if not skip_enabled:
        return False
    try:
        if not (output_path.exists() and assembly_path.exists()):
            return False
        if _mtime(output_path) < _mtime(assembly_path):
            return False
        return _config_is_current(config_path, config_copy_path)
    except OSError as exc:
        logger.debug("Cannot confirm freshness of %s: %s", output_path, exc)
        return False
