"""Config file lookup for a bundled assembly.

WHY: Managed assemblies may ship a companion {name}.config file. The build
hands the bundler one flat list of config files for all assemblies, so each
assembly has to find its own by name.

HOW: Compare the lowercased base name of every candidate against
"{name}.config" lowercased and return the first hit.

RULES:
- Matching is case-insensitive on the base file name only
- First match in input order wins; later case variants are ignored
- Empty entries are skipped
- No match returns None; absence is a normal outcome, not an error
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from assembly_bundler.config import CONFIG_SUFFIX


def resolve_config_file(
    name: str,
    config_files: Iterable[Union[str, Path]],
) -> Optional[Path]:
    """Find the config file belonging to the assembly registered as ``name``.

    Args:
        name: Derived assembly name, e.g. "Foo.dll".
        config_files: Candidate config file paths, in build order.

    Returns:
        The first candidate named "{name}.config" (any case), or None.
    """
    wanted = (name + CONFIG_SUFFIX).lower()
    for candidate in config_files:
        if not candidate or not str(candidate).strip():
            continue
        path = Path(candidate)
        if path.name.lower() == wanted:
            return path
    return None
