"""In-memory model of the units a generation run produces.

Units are assembled completely before they enter the CodeModel, and the
CodeModel is serialized once at the end of the run. A unit that failed
half-way never reaches the model, so it can never be written.

Components:
    AccessorPair - Eager and deferred accessor for one resource key
    HolderDeclaration - The per-unit bundle holder and its runtime imports
    OutputUnit - One generated module
    CodeModel - Ordered, name-unique collection of units for one run

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from localizer.constants import (
    ARGUMENT_PREFIX,
    DEFAULT_RUNTIME_MODULE,
    HOLDER_CLASS,
    HOLDER_NAME,
    LOCALIZABLE_CLASS,
)
from localizer.diagnostics import HolderNameCollisionError, UnitNameCollisionError
from localizer.naming import to_deferred_identifier, to_identifier
from localizer.types import ResourceKey, Template, UnitName

__all__ = ["AccessorPair", "CodeModel", "HolderDeclaration", "OutputUnit"]


@dataclass(frozen=True, slots=True)
class AccessorPair:
    """Both accessors generated for one resource key.

    Attributes:
        key: Resource key passed to the holder at runtime
        template: Raw template text, carried into the docstrings
        arity: Number of positional parameters of both accessors
        identifier: Eager accessor name (returns a formatted str)
        deferred_identifier: Deferred accessor name (returns a Localizable)
    """

    key: ResourceKey
    template: Template
    arity: int
    identifier: str
    deferred_identifier: str

    def __post_init__(self) -> None:
        """Validate arity.

        Raises:
            ValueError: If arity is negative
        """
        if self.arity < 0:
            msg = f"arity must be >= 0, got {self.arity}"
            raise ValueError(msg)

    @classmethod
    def for_key(cls, key: ResourceKey, template: Template, arity: int) -> "AccessorPair":
        """Create the pair for a key, deriving both accessor names."""
        return cls(
            key=key,
            template=template,
            arity=arity,
            identifier=to_identifier(key),
            deferred_identifier=to_deferred_identifier(key),
        )

    @property
    def parameters(self) -> tuple[str, ...]:
        """Parameter names: arg1..argN."""
        return tuple(f"{ARGUMENT_PREFIX}{i}" for i in range(1, self.arity + 1))


@dataclass(frozen=True, slots=True)
class HolderDeclaration:
    """The holder every unit constructs once, and where its classes live.

    Attributes:
        runtime_module: Module the generated code imports from
        name: Module-level variable bound to the holder
        holder_class: Class constructed with the unit's module name
        localizable_class: Class the deferred accessors return
    """

    runtime_module: str = DEFAULT_RUNTIME_MODULE
    name: str = HOLDER_NAME
    holder_class: str = HOLDER_CLASS
    localizable_class: str = LOCALIZABLE_CLASS


@dataclass(frozen=True, slots=True)
class OutputUnit:
    """One generated module.

    Attributes:
        name: Dotted unit name
        source: Resource file the unit was generated from
        holder: Holder declaration
        accessors: Accessor pairs in resource-table order
    """

    name: UnitName
    source: Path
    holder: HolderDeclaration = field(default_factory=HolderDeclaration)
    accessors: tuple[AccessorPair, ...] = ()

    def __post_init__(self) -> None:
        """Reject accessors that would rebind the holder or its imported classes.

        Raises:
            HolderNameCollisionError: If an accessor name equals the holder
                name, the holder class or the localizable class
        """
        reserved = {
            self.holder.name,
            self.holder.holder_class,
            self.holder.localizable_class,
        }
        for pair in self.accessors:
            for identifier in (pair.identifier, pair.deferred_identifier):
                if identifier in reserved:
                    raise HolderNameCollisionError(pair.key, identifier)

    @property
    def identifiers(self) -> list[str]:
        """All accessor names in emission order."""
        names: list[str] = []
        for pair in self.accessors:
            names.extend((pair.identifier, pair.deferred_identifier))
        return names


@dataclass(slots=True)
class CodeModel:
    """Ordered collection of fully built units for one generation run.

    Example:
        >>> model = CodeModel()
        >>> model.add(OutputUnit("app.Messages", Path("app/Messages.properties")))
        >>> "app.Messages" in model
        True
    """

    _units: dict[UnitName, OutputUnit] = field(default_factory=dict)

    def add(self, unit: OutputUnit) -> None:
        """Add a unit.

        Raises:
            UnitNameCollisionError: If a unit with the same name exists
        """
        existing = self._units.get(unit.name)
        if existing is not None:
            raise UnitNameCollisionError(unit.name, first=existing.source, second=unit.source)
        self._units[unit.name] = unit

    @property
    def units(self) -> tuple[OutputUnit, ...]:
        """Units in the order they were added."""
        return tuple(self._units.values())

    def __contains__(self, name: object) -> bool:
        return name in self._units

    def __iter__(self) -> Iterator[OutputUnit]:
        return iter(self._units.values())

    def __len__(self) -> int:
        return len(self._units)
