"""Symbol naming capability for generated bundles.

WHY: The name under which an assembly is registered, and the C function
names that expose it, must be legal and unique across a whole build. That
policy belongs to the build integration, not to the bundle writer, so the
core only depends on this small interface.

HOW: SymbolProvider is an ABC with four methods: one to derive the name
from an assembly path, three to turn that name into the getter, config
getter, and cleanup function names. DefaultSymbolProvider is a simple
implementation used by the CLI.

RULES:
- derive_name() output is used both as the runtime lookup key and as the
  base of the function names
- Function names returned by the provider must be valid C identifiers
- Uniqueness across assemblies is the provider's responsibility
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path

_NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z_]")


class SymbolProvider(ABC):
    """Abstract source of bundle names and C function names.

    To plug in a different naming policy:
    1. Subclass SymbolProvider
    2. Implement the four methods
    3. Pass an instance to BundleGenerator(settings, symbols=...)
    """

    @abstractmethod
    def derive_name(self, assembly_path: Path) -> str:
        """Name the assembly is registered under, e.g. 'Foo.Bar.dll'."""

    @abstractmethod
    def getter_symbol(self, name: str) -> str:
        """C function returning the MonoBundledAssembly for ``name``."""

    @abstractmethod
    def config_getter_symbol(self, name: str) -> str:
        """C function returning the MonoBundledAssemblyConfig for ``name``."""

    @abstractmethod
    def cleanup_symbol(self, name: str) -> str:
        """C function releasing resources held for ``name``."""


def to_identifier(name: str) -> str:
    """Replace every character that is not legal in a C identifier with '_'."""
    return _NON_IDENTIFIER.sub("_", name)


class DefaultSymbolProvider(SymbolProvider):
    """Names assemblies by file name and prefixes sanitized function names.

    Foo.Bar.dll → name "Foo.Bar.dll", getter
    "mono_bundled_assembly_get_Foo_Bar_dll". Two assemblies whose file names
    differ only in punctuation would collide; callers with such inputs
    should supply their own provider.
    """

    def __init__(self, prefix: str = "mono_bundled_assembly") -> None:
        self.prefix = prefix

    def derive_name(self, assembly_path: Path) -> str:
        return Path(assembly_path).name

    def getter_symbol(self, name: str) -> str:
        return "{}_get_{}".format(self.prefix, to_identifier(name))

    def config_getter_symbol(self, name: str) -> str:
        return "{}_get_config_{}".format(self.prefix, to_identifier(name))

    def cleanup_symbol(self, name: str) -> str:
        return "{}_cleanup_{}".format(self.prefix, to_identifier(name))
