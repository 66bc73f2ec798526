"""Accessor-module generator.

Turns resource bundles into Python modules with one eager and one
deferred accessor per key.

Run lifecycle (one Generator instance per run):
    1. generate(relative_paths): filter to base resource files, skip
       units whose module is newer than the resource, build the rest
       into the run's in-memory CodeModel
    2. build(): write every unit in the CodeModel in one batch

run() does both. Units enter the CodeModel only when fully built, so a
failing resource file never leaves a partial unit behind, and units
built before the failure stay in the model.

Freshness is a timestamp heuristic: a module strictly newer than its
resource file is kept. Copying resources with preserved old timestamps,
or clock skew, can keep a stale module.

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from localizer.analysis.arguments import infer_arity
from localizer.codegen.emitter import write_units
from localizer.codegen.model import AccessorPair, CodeModel, HolderDeclaration, OutputUnit
from localizer.config import GeneratorConfig
from localizer.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    LocalizerError,
    ResourceGenerationError,
    TemplateSyntaxError,
    UnitNameCollisionError,
)
from localizer.naming import to_unit_name, unit_source_path
from localizer.scanner import ResourceFile
from localizer.syntax.properties import load_properties
from localizer.types import UnitName

__all__ = ["GenerationContext", "GenerationReport", "Generator"]


@dataclass(slots=True)
class GenerationContext:
    """Mutable state of one generation run.

    Attributes:
        model: Units built so far
        claimed: Unit name -> resource file, for every accepted resource
            (generated or skipped as up to date)
    """

    model: CodeModel = field(default_factory=CodeModel)
    claimed: dict[UnitName, Path] = field(default_factory=dict)

    def claim(self, unit_name: UnitName, source: Path) -> bool:
        """Reserve a unit name for a resource file.

        Returns:
            True on the first claim, False if source already holds the name

        Raises:
            UnitNameCollisionError: If another resource file holds the name
        """
        holder = self.claimed.get(unit_name)
        if holder is None:
            self.claimed[unit_name] = source
            return True
        if holder == source:
            return False
        raise UnitNameCollisionError(unit_name, first=holder, second=source)


@dataclass(slots=True)
class GenerationReport:
    """Outcome of a generation run.

    Attributes:
        generated: Units built in this run
        skipped: Units left alone because their module is up to date
        failed: Resource files that failed, with the wrapping error
            (only populated when fail_fast is off)
        written: Module paths written by build()
    """

    generated: list[UnitName] = field(default_factory=list)
    skipped: list[UnitName] = field(default_factory=list)
    failed: list[tuple[Path, ResourceGenerationError]] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if no resource file failed."""
        return not self.failed


class Generator:
    """Generates accessor modules from resource bundles.

    Example:
        >>> config = GeneratorConfig(output_dir=Path("build/generated"), base_dir=Path("resources"))
        >>> report = Generator(config).run(["app/Messages.properties", "app/Messages_fr.properties"])
        >>> report.generated
        ['app.Messages']
    """

    def __init__(self, config: GeneratorConfig, logger: logging.Logger | None = None) -> None:
        """Initialize a generator for one run.

        Args:
            config: Run configuration
            logger: Logging sink; defaults to this module's logger
        """
        self._config = config
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._context = GenerationContext()
        self._holder = HolderDeclaration(runtime_module=config.runtime_module)

    @property
    def config(self) -> GeneratorConfig:
        """Run configuration."""
        return self._config

    @property
    def code_model(self) -> CodeModel:
        """Units built so far in this run."""
        return self._context.model

    def accepts(self, relative_path: str | PurePath) -> bool:
        """True for base resource files: right suffix, no locale marker.

        Only the file name is inspected, so directories may contain the
        locale marker.
        """
        name = PurePath(relative_path).name
        if not name.endswith(self._config.suffix) or self._config.locale_marker in name:
            return False
        return self._config.file_mask is None or name == self._config.file_mask

    def _is_up_to_date(self, target: Path, resource: ResourceFile) -> bool:
        try:
            generated_ns = target.stat().st_mtime_ns
        except OSError:
            return False
        return generated_ns > resource.last_modified_ns

    def generate_file(self, resource: ResourceFile) -> OutputUnit | None:
        """Build the unit for one resource file into the code model.

        Args:
            resource: Located resource file

        Returns:
            The built unit, or None if the existing module is up to date or
            this resource was already processed in the run

        Raises:
            UnitNameCollisionError: If another resource claimed the unit name
            ResourceReadError: If the file cannot be read
            PropertiesSyntaxError: On a malformed escape in the file
            TemplateSyntaxError: If a template is malformed (key attached)
            HolderNameCollisionError: If a key's accessor shadows the holder
        """
        unit_name = to_unit_name(resource.relative_path, self._config.suffix)
        if not self._context.claim(unit_name, resource.path):
            self._logger.debug("%s already processed in this run", resource.path)
            return None

        target = unit_source_path(self._config.output_dir, unit_name)
        if self._is_up_to_date(target, resource):
            self._logger.debug("%s is up to date", target)
            return None

        table = load_properties(resource.path, encoding=self._config.encoding)
        pairs: list[AccessorPair] = []
        for key, template in table.items():
            try:
                arity = infer_arity(
                    template,
                    self._config.arg_count_strategy,
                    locale=self._config.locale,
                )
            except TemplateSyntaxError as e:
                e.key = key
                raise
            pairs.append(AccessorPair.for_key(key, template, arity))

        unit = OutputUnit(
            name=unit_name,
            source=resource.path,
            holder=self._holder,
            accessors=tuple(pairs),
        )
        self._context.model.add(unit)
        self._logger.debug("Built unit %s from %s (%d keys)", unit_name, resource.path, len(pairs))
        return unit

    def _wrap(self, path: Path, error: LocalizerError) -> ResourceGenerationError:
        detail = str(error)
        if isinstance(error, TemplateSyntaxError) and error.key is not None:
            detail = f"key '{error.key}': {detail}"
        diagnostic = Diagnostic(
            code=DiagnosticCode.RESOURCE_GENERATION_FAILED,
            message=f"Failed to generate a unit from {path}: {detail}",
            location=str(path),
        )
        return ResourceGenerationError(diagnostic, path=path)

    def generate(self, relative_paths: Iterable[str | PurePath]) -> GenerationReport:
        """Build units for every accepted candidate.

        Args:
            relative_paths: Candidate paths relative to config.base_dir

        Returns:
            Report of generated, skipped and (with fail_fast off) failed files

        Raises:
            ResourceGenerationError: First per-file failure, if fail_fast
            UnitNameCollisionError: Always fatal, before anything is written
        """
        report = GenerationReport()
        for relative_path in relative_paths:
            if not self.accepts(relative_path):
                continue

            path = self._config.base_dir / relative_path
            try:
                resource = ResourceFile.locate(self._config.base_dir, relative_path)
                unit = self.generate_file(resource)
            except UnitNameCollisionError:
                raise
            except LocalizerError as e:
                error = self._wrap(path, e)
                if self._config.fail_fast:
                    raise error from e
                error.__cause__ = e
                self._logger.error("%s", error)
                report.failed.append((path, error))
                continue

            if unit is not None:
                report.generated.append(unit.name)
                continue
            unit_name = to_unit_name(relative_path, self._config.suffix)
            if unit_name not in report.generated and unit_name not in report.skipped:
                report.skipped.append(unit_name)

        self._logger.info(
            "Generated %d unit(s), %d up to date, %d failed",
            len(report.generated),
            len(report.skipped),
            len(report.failed),
        )
        return report

    def build(self) -> list[Path]:
        """Write every unit built so far to config.output_dir.

        Raises:
            EmissionError: If the output directory or a module cannot be written
        """
        return write_units(
            self._context.model,
            self._config.output_dir,
            escape_markup=self._config.escape_markup,
        )

    def run(self, relative_paths: Iterable[str | PurePath]) -> GenerationReport:
        """Generate units for the candidates, then write them in one batch."""
        report = self.generate(relative_paths)
        report.written = self.build()
        return report
