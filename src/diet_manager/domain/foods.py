"""Domain models for the food catalog."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

BASIC = "basic"
COMPOSITE = "composite"
NAMESPACES = (BASIC, COMPOSITE)


def canonical_name(name: str) -> str:
    """Return the lower-case storage key for a food name."""
    return name.strip().lower()


def _frozen(mapping: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class BasicFood:
    """A food with a directly stored per-serving calorie value."""

    name: str
    keywords: tuple[str, ...]
    calories: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", tuple(self.keywords))

    @property
    def namespace(self) -> str:
        return BASIC


@dataclass(frozen=True)
class CompositeFood:
    """A food whose calories are derived from referenced ingredients.

    ``calories`` is computed once when the record is built and is not
    refreshed when a referenced food changes later.
    """

    name: str
    keywords: tuple[str, ...]
    ingredients: Mapping[str, int] = field(hash=False)
    calories: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", tuple(self.keywords))
        object.__setattr__(self, "ingredients", _frozen(self.ingredients))

    @property
    def namespace(self) -> str:
        return COMPOSITE


FoodRecord = BasicFood | CompositeFood


@dataclass(frozen=True)
class FoodSnapshot:
    """Copy of a food record taken when it is logged."""

    namespace: str
    keywords: tuple[str, ...]
    calories: int
    ingredients: Mapping[str, int] | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", tuple(self.keywords))
        if self.ingredients is not None:
            object.__setattr__(self, "ingredients", _frozen(self.ingredients))

    @classmethod
    def of(cls, record: FoodRecord) -> "FoodSnapshot":
        """Build a snapshot detached from the catalog record."""
        ingredients = (
            record.ingredients if isinstance(record, CompositeFood) else None
        )
        return cls(
            namespace=record.namespace,
            keywords=tuple(record.keywords),
            calories=record.calories,
            ingredients=ingredients,
        )


@dataclass(frozen=True)
class SearchResults:
    """Search matches partitioned by namespace."""

    basic: list[BasicFood]
    composite: list[CompositeFood]

    def __len__(self) -> int:
        return len(self.basic) + len(self.composite)

    def names(self) -> list[str]:
        """Return matched names, basic foods first."""
        return [food.name for food in self.basic] + [
            food.name for food in self.composite
        ]


@dataclass
class CatalogState:
    """In-memory basic and composite namespaces, keyed by canonical name."""

    basic: dict[str, BasicFood] = field(default_factory=dict)
    composite: dict[str, CompositeFood] = field(default_factory=dict)

    def namespace(self, name: str) -> dict[str, FoodRecord]:
        """Return the mapping for ``basic`` or ``composite``."""
        if name == BASIC:
            return self.basic
        if name == COMPOSITE:
            return self.composite
        raise KeyError(name)

    def replace_with(self, other: "CatalogState") -> None:
        """Swap in another state's records, keeping this object's identity."""
        self.basic.clear()
        self.basic.update(other.basic)
        self.composite.clear()
        self.composite.update(other.composite)
