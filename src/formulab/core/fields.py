"""Field kinds and the registry of known field names."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator


class FieldKind(Enum):
    """Which side of a record a field lives on."""
    INPUT = "input"
    OUTPUT = "output"


class UnknownFieldError(KeyError):
    """Raised when a field name is not present in a registry."""

    def __init__(self, name: str, kind: FieldKind | None = None) -> None:
        self.name = name
        self.kind = kind
        where = f" {kind.value}" if kind is not None else ""
        super().__init__(f"Unknown{where} field '{name}'")

    def __str__(self) -> str:
        return self.args[0]


# Ingredient and process settings used by the elastomer formulation lab.
FORMULATION_INPUTS: tuple[str, ...] = (
    "Polymer 1",
    "Polymer 2",
    "Polymer 3",
    "Polymer 4",
    "Silica Filler 1",
    "Silica Filler 2",
    "Carbon Black High Grade",
    "Carbon Black Low Grade",
    "Plasticizer 1",
    "Plasticizer 2",
    "Plasticizer 3",
    "Co-Agent 1",
    "Co-Agent 2",
    "Co-Agent 3",
    "Curing Agent 1",
    "Curing Agent 2",
    "Antioxidant",
    "Oven Temperature",
)

# Measured performance properties.
FORMULATION_OUTPUTS: tuple[str, ...] = (
    "Tensile Strength",
    "Elongation",
    "Compression Set",
    "Cure Time",
    "Viscosity",
)


class FieldRegistry:
    """Immutable set of known input and output field names.

    Built once (from a dataset at load time, or from the canonical
    formulation vocabulary) so string lookups can be validated up front
    instead of silently reading a missing key later.
    """

    __slots__ = ("_inputs", "_outputs")

    def __init__(self, inputs: Iterable[str] = (), outputs: Iterable[str] = ()) -> None:
        self._inputs = tuple(dict.fromkeys(inputs))
        self._outputs = tuple(dict.fromkeys(outputs))

    @classmethod
    def formulation(cls) -> FieldRegistry:
        """Registry of the canonical formulation field names."""
        return cls(FORMULATION_INPUTS, FORMULATION_OUTPUTS)

    @property
    def inputs(self) -> tuple[str, ...]:
        return self._inputs

    @property
    def outputs(self) -> tuple[str, ...]:
        return self._outputs

    def names(self, kind: FieldKind) -> tuple[str, ...]:
        return self._inputs if kind is FieldKind.INPUT else self._outputs

    def has(self, name: str, kind: FieldKind | None = None) -> bool:
        if kind is None:
            return name in self._inputs or name in self._outputs
        return name in self.names(kind)

    def require(self, name: str, kind: FieldKind | None = None) -> str:
        """Return *name* unchanged, or raise ``UnknownFieldError``."""
        if not self.has(name, kind):
            raise UnknownFieldError(name, kind)
        return name

    def kind_of(self, name: str) -> FieldKind:
        """Return the kind of *name*; inputs win when a name is on both sides."""
        if name in self._inputs:
            return FieldKind.INPUT
        if name in self._outputs:
            return FieldKind.OUTPUT
        raise UnknownFieldError(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        seen = dict.fromkeys(self._inputs)
        seen.update(dict.fromkeys(self._outputs))
        return iter(seen)

    def __len__(self) -> int:
        return len(set(self._inputs) | set(self._outputs))

    def __repr__(self) -> str:
        return f"FieldRegistry(inputs={list(self._inputs)!r}, outputs={list(self._outputs)!r})"
