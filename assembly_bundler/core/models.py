"""Dataclasses describing one bundle unit and the outcome of a batch.

WHY: The emitter, the staleness check, and the generator all talk about
the same handful of paths per assembly. Naming them once keeps the
output/config-copy layout consistent, and the result dataclasses give
callers (CLI, report) a typed view of what a run produced.

HOW: Four dataclasses:
  AssemblyUnit     — one input assembly with its derived name and output paths
  EmitResult       — what a single emit actually wrote
  UnitFailure      — a fatal per-assembly error recorded by the generator
  GenerationResult — append-only lists accumulated across the batch

RULES:
- AssemblyUnit is frozen; its identity is the assembly path
- generated_files lists outputs in input order, skipped outputs included
- bundled_config_files only lists configs that were actually bundled
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class AssemblyUnit:
    """One assembly to bundle, with the paths derived from it.

    Attributes:
        assembly_path: The input assembly file.
        name: Derived symbol name from the SymbolProvider.
        output_path: Generated .bundle.c file.
        config_copy_path: Copy of the last bundled config, next to the output.
    """

    assembly_path: Path
    name: str
    output_path: Path
    config_copy_path: Path


@dataclass
class EmitResult:
    """Paths written by one emit.

    config_path is None when no config was bundled, including the case
    where a config was resolved but could not be opened.
    """

    output_path: Path
    config_path: Path | None = None


@dataclass
class UnitFailure:
    assembly_path: Path
    message: str


@dataclass
class GenerationResult:
    """Outcome of one BundleGenerator run."""

    generated_files: list[Path] = field(default_factory=list)
    bundled_config_files: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failures: list[UnitFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures
