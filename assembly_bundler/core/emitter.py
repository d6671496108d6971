"""Bundle emitter — writes one .bundle.c file for one assembly.

WHY: The native host links every bundle file and calls its getter
functions at startup to register the embedded assemblies with the
runtime. The file layout below is the contract with that host code, so
it is written line by line in a fixed order.

HOW: Streams the assembly into a `bundle_data` array, declares the
MonoBundledAssembly struct and its getter, then does the same for the
optional config file (`config_data`, null-terminated), refreshes the
config copy artifact, and finishes with the config getter and the
cleanup function.

RULES:
- Output is truncated and rewritten, never appended to
- The assembly payload is raw bytes; the config payload gets a trailing 0
- A config that cannot be opened is treated as absent (logged, not raised)
- The config copy artifact is deleted on every emit and recreated only
  when a config was bundled, unless the copy path is the input config
  itself (output directory == config directory)
- Names are written as ASCII-only C literals (octal escapes)
- The cleanup function is always emitted, even though its body is empty
- On any error the partially written output is removed and the error
  propagates
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import BinaryIO, Optional, TextIO

from assembly_bundler.core.c_array import write_c_array
from assembly_bundler.core.models import EmitResult
from assembly_bundler.core.symbols import SymbolProvider

logger = logging.getLogger(__name__)

ASSEMBLY_STRUCT = (
    "typedef struct { const char* name; const unsigned char* data; "
    "const unsigned int size; } MonoBundledAssembly;"
)
CONFIG_STRUCT = "typedef struct { const char* name; const char* data; } MonoBundledAssemblyConfig;"


def c_string(value: str) -> str:
    """Quote ``value`` as an ASCII-only C string literal.

    The name is encoded as UTF-8 (undecodable file name bytes kept via
    surrogateescape); every byte outside printable ASCII becomes a
    three-digit octal escape, so the runtime sees the original bytes.
    """
    parts = []
    for b in value.encode("utf-8", errors="surrogateescape"):
        if b in (0x22, 0x5C):
            parts.append("\\" + chr(b))
        elif 0x20 <= b < 0x7F:
            parts.append(chr(b))
        else:
            parts.append("\\{:03o}".format(b))
    return '"{}"'.format("".join(parts))


def _write_config(out: TextIO, name: str, config_path: Optional[Path]) -> Optional[Path]:
    """Write the config array and struct; return the config actually bundled."""
    if config_path is not None:
        try:
            config_stream = open(config_path, "rb")
        except OSError as exc:
            logger.info("Config file '%s' could not be opened, bundling without it: %s", config_path, exc)
            config_path = None
        else:
            with config_stream:
                logger.debug("    Found assembly config file '%s'", config_path)
                out.write("static const char config_data [] = {\n")
                write_c_array(config_stream, out)
                out.write("0};\n")
            out.write("static const MonoBundledAssemblyConfig config = {{{}, config_data}};\n".format(c_string(name)))
            return config_path

    logger.info("No assembly config file for '%s', bundling without one", name)
    out.write("static const MonoBundledAssemblyConfig config = {{{}, 0L}};\n".format(c_string(name)))
    return None


def _same_file(a: Path, b: Path) -> bool:
    if a.exists() and b.exists():
        return os.path.samefile(a, b)
    return a.resolve() == b.resolve()


def _refresh_config_copy(
    resolved_config: Optional[Path],
    config_path: Optional[Path],
    config_copy_path: Path,
) -> None:
    if resolved_config is not None and _same_file(resolved_config, config_copy_path):
        # Output directory holds the input config itself; never delete it
        return
    if config_copy_path.exists():
        config_copy_path.unlink()
    if config_path is not None:
        # copyfile gives the copy a fresh mtime for the next staleness check
        shutil.copyfile(config_path, config_copy_path)


def emit_bundle(
    assembly_stream: BinaryIO,
    name: str,
    config_path: Optional[Path],
    output_path: Path,
    config_copy_path: Path,
    symbols: SymbolProvider,
) -> EmitResult:
    """Write the bundle source for one assembly.

    Args:
        assembly_stream: Open binary stream positioned at the assembly start.
        name: Derived assembly name (runtime lookup key).
        config_path: Resolved config file, or None.
        output_path: The .bundle.c file to (re)write.
        config_copy_path: Location of the config copy artifact.
        symbols: Provides the three C function names.

    Returns:
        EmitResult with the output path and the config that was bundled.

    Raises:
        OSError: If the output or config copy cannot be written.
    """
    quoted = c_string(name)
    out = open(output_path, "w", encoding="utf-8", newline="\n")
    try:
        with out:
            out.write("static const unsigned char bundle_data [] = {\n")
            size = write_c_array(assembly_stream, out)
            out.write("};\n")
            out.write(ASSEMBLY_STRUCT + "\n")
            out.write("static const MonoBundledAssembly bundle = {{{}, bundle_data, {}}};\n".format(quoted, size))
            out.write("const MonoBundledAssembly *{} (void) {{ return &bundle; }}\n".format(
                symbols.getter_symbol(name)
            ))

            out.write(CONFIG_STRUCT + "\n")
            bundled_config = _write_config(out, name, config_path)
            _refresh_config_copy(config_path, bundled_config, config_copy_path)
            out.write("const MonoBundledAssemblyConfig *{} (void) {{ return &config; }}\n".format(
                symbols.config_getter_symbol(name)
            ))

            # Nothing to release until bundles are compressed
            out.write("void {} (void) {{ return; }}\n".format(symbols.cleanup_symbol(name)))
    except Exception:
        output_path.unlink(missing_ok=True)
        raise

    return EmitResult(output_path=output_path, config_path=bundled_config)
