"""Assembly Bundler — embed managed assemblies into C source for static hosts.

WHY: A statically linked native host cannot load assemblies from disk. It
needs every managed assembly (and its optional .config file) compiled into
the executable, reachable through a small set of C lookup functions.

HOW: Two-stage pipeline per assembly: evaluate (skip unchanged outputs),
emit (write a .bundle.c file holding the bytes as a C array plus getter,
config getter and cleanup functions). The generator drives the batch and
collects the generated files and bundled config files for the caller.

RULES:
- One .bundle.c file per assembly, never several assemblies per file
- Symbol names come from a SymbolProvider; the core never invents them
- Config files are optional; a missing or unreadable one is not an error
"""

__version__ = "0.1.0"
