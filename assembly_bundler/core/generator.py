"""Batch driver — bundle every assembly of a build into the output directory.

WHY: A build bundles dozens of assemblies at once and needs back the list
of generated sources (to compile) and the config files that went into
them (to track as inputs). One bad assembly must not hide the state of
the others, and nothing here may crash the host process.

HOW: For each assembly, in order: derive its name, resolve its config,
ask the staleness check whether the previous output is still good, and
otherwise open the assembly and run the emitter. Results accumulate in a
GenerationResult. execute() is the top-level guard that turns any
unexpected exception into a False return.

RULES:
- The output directory is created if it does not exist
- A skipped assembly still reports its output (and the config it was
  built from); the files on disk are valid build outputs
- A fatal error for one assembly is recorded as a UnitFailure and the
  batch continues; the run then reports success=False
- Failed assemblies leave no output file and no generated_files entry
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from assembly_bundler.config import BundleSettings
from assembly_bundler.core.emitter import emit_bundle
from assembly_bundler.core.models import AssemblyUnit, GenerationResult, UnitFailure
from assembly_bundler.core.resolver import resolve_config_file
from assembly_bundler.core.staleness import should_skip
from assembly_bundler.core.symbols import DefaultSymbolProvider, SymbolProvider

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class BundleError(Exception):
    """Raised when one assembly cannot be bundled.

    WHY: Callers report failures per assembly, so the error must say which
    assembly broke, not just which file operation failed.

    HOW: Wraps the underlying OSError or UnicodeError (kept as __cause__)
    with the assembly path.

    RULES:
    - Always carries assembly_path
    - Raised for unreadable assemblies, unwritable outputs, and names or
      symbols that cannot be encoded; config problems never raise
    """

    def __init__(self, assembly_path: Path, message: str) -> None:
        self.assembly_path = assembly_path
        self.message = message
        super().__init__("Failed to bundle '{}': {}".format(assembly_path, message))


def _debug_items(title: str, items: Iterable[PathLike]) -> None:
    logger.debug(title)
    for item in items:
        logger.debug("    %s", item)


class BundleGenerator:
    """Generates .bundle.c sources for a list of assemblies.

    Usage::

        generator = BundleGenerator(BundleSettings(output_dir=Path("obj/bundles")))
        result = generator.generate(["bin/App.exe", "bin/Lib.dll"], ["bin/App.exe.config"])
    """

    def __init__(
        self,
        settings: BundleSettings,
        symbols: Optional[SymbolProvider] = None,
    ) -> None:
        self.settings = settings
        self.symbols = symbols if symbols is not None else DefaultSymbolProvider()
        self.result: Optional[GenerationResult] = None

    def unit_for(self, assembly_path: PathLike) -> AssemblyUnit:
        path = Path(assembly_path)
        name = self.symbols.derive_name(path)
        return AssemblyUnit(
            assembly_path=path,
            name=name,
            output_path=self.settings.output_path_for(path),
            config_copy_path=self.settings.config_copy_path_for(name),
        )

    def generate_unit(
        self,
        assembly_path: PathLike,
        config_files: List[PathLike],
    ) -> Tuple[Path, Optional[Path], bool]:
        """Bundle a single assembly.

        Returns:
            (output path, bundled config or None, whether the emit was skipped).

        Raises:
            BundleError: If the assembly cannot be read, the output written,
                or a name encoded.
        """
        unit = self.unit_for(assembly_path)
        config_path = resolve_config_file(unit.name, config_files)

        if should_skip(
            unit.assembly_path,
            unit.output_path,
            config_path,
            unit.config_copy_path,
            self.settings.skip_unchanged,
        ):
            logger.debug("  Not regenerating bundle file for unchanged assembly: %s", unit.assembly_path)
            return unit.output_path, config_path, True

        logger.debug("  Generating output '%s' from assembly '%s'", unit.output_path, unit.assembly_path)
        try:
            with open(unit.assembly_path, "rb") as assembly_stream:
                emitted = emit_bundle(
                    assembly_stream,
                    unit.name,
                    config_path,
                    unit.output_path,
                    unit.config_copy_path,
                    self.symbols,
                )
        except (OSError, UnicodeError) as exc:
            raise BundleError(unit.assembly_path, str(exc)) from exc

        return emitted.output_path, emitted.config_path, False

    def generate(
        self,
        assemblies: Iterable[PathLike],
        config_files: Iterable[PathLike],
    ) -> GenerationResult:
        """Bundle every assembly and collect the outputs.

        Args:
            assemblies: Assembly files to embed, in build order.
            config_files: All candidate .config files for this build.

        Returns:
            GenerationResult with generated files, bundled configs, skipped
            outputs, and per-assembly failures.
        """
        assemblies = list(assemblies)
        config_files = list(config_files)

        logger.debug("Bundle generation")
        _debug_items("  Assemblies:", assemblies)
        _debug_items("  Config files:", config_files)
        logger.debug("  Skip unchanged: %s", self.settings.skip_unchanged)

        self.settings.output_dir.mkdir(parents=True, exist_ok=True)

        result = GenerationResult()
        for assembly in assemblies:
            try:
                output_path, config_path, skipped = self.generate_unit(assembly, config_files)
            except BundleError as exc:
                logger.exception("Bundling failed for assembly %s", exc.assembly_path)
                result.failures.append(UnitFailure(assembly_path=exc.assembly_path, message=exc.message))
                continue

            result.generated_files.append(output_path)
            if skipped:
                result.skipped.append(output_path)
            if config_path is not None:
                result.bundled_config_files.append(config_path)

        _debug_items("  Generated files:", result.generated_files)
        _debug_items("  Bundled config files:", result.bundled_config_files)
        return result

    def execute(
        self,
        assemblies: Iterable[PathLike],
        config_files: Iterable[PathLike],
    ) -> bool:
        """Run generate() without ever raising.

        The result is stored on ``self.result``; it stays None when the
        batch aborted with an unexpected exception.
        """
        self.result = None
        try:
            self.result = self.generate(assemblies, config_files)
        except Exception:
            logger.exception("Bundle generation aborted")
            return False
        return self.result.success
