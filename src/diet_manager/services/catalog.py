"""Services for managing the basic and composite food catalog."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from diet_manager.domain.errors import (
    InvariantViolation,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from diet_manager.domain.foods import (
    BASIC,
    COMPOSITE,
    NAMESPACES,
    BasicFood,
    CatalogState,
    CompositeFood,
    FoodRecord,
    FoodSnapshot,
    SearchResults,
    canonical_name,
)
from diet_manager.services.commands import CommandManager
from diet_manager.services.resolver import NameResolver
from diet_manager.services.search import SearchIndex

logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for the food catalog."""

    def load(self) -> CatalogState:
        """Return the stored catalog, empty when nothing is stored yet."""

    def save(self, state: CatalogState) -> None:
        """Replace the stored catalog with ``state``."""


@dataclass(frozen=True)
class PutFoodCommand:
    """Store ``record`` under ``name``; reverting restores ``previous``."""

    namespace: str
    name: str
    record: FoodRecord
    previous: FoodRecord | None

    def apply(self, state: CatalogState) -> None:
        state.namespace(self.namespace)[self.name] = self.record

    def revert(self, state: CatalogState) -> None:
        records = state.namespace(self.namespace)
        if records.get(self.name) != self.record:
            raise InvariantViolation(
                f"{self.namespace} food '{self.name}' changed outside of history"
            )
        if self.previous is None:
            del records[self.name]
        else:
            records[self.name] = self.previous


@dataclass
class FoodCatalog:
    """Application service owning the food catalog and its undo history.

    Every mutation goes through the catalog's own :class:`CommandManager`
    and is written through to the repository. Instances are not safe for
    concurrent mutation from several threads.
    """

    repository: CatalogRepository
    state: CatalogState = field(init=False)
    commands: CommandManager[CatalogState] = field(init=False)
    dirty: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.state = self.repository.load()
        self.commands = CommandManager(self.state)
        self._resolver = NameResolver(self.state)
        self._index = SearchIndex(self.state)

    def add_or_update_basic(
        self, name: str, keywords: Sequence[str], calories: int
    ) -> BasicFood:
        """Create or replace a basic food."""
        key = _require_name(name)
        if not _is_positive_int(calories):
            raise ValidationError(
                f"Calories for '{key}' must be a positive integer, got {calories!r}"
            )
        food = BasicFood(name=key, keywords=_keywords(keywords), calories=calories)
        self._put(BASIC, food)
        return food

    def add_or_update_composite(
        self, name: str, keywords: Sequence[str], ingredients: Mapping[str, int]
    ) -> CompositeFood:
        """Create or replace a composite food built from existing foods.

        Ingredients are resolved basic-first and their current per-serving
        calories are multiplied into a total stored with the record.
        """
        key = _require_name(name)
        if not ingredients:
            raise ValidationError(f"Composite food '{key}' needs ingredients")
        resolved_servings: dict[str, int] = {}
        total = 0
        for ingredient, servings in ingredients.items():
            if not _is_positive_int(servings):
                raise ValidationError(
                    f"Servings of '{ingredient}' must be a positive integer, "
                    f"got {servings!r}"
                )
            if canonical_name(ingredient) == key:
                raise ValidationError(f"Composite food '{key}' cannot contain itself")
            resolved = self._resolver.resolve(ingredient)
            if resolved is None:
                raise ValidationError(f"Ingredient '{ingredient}' not found")
            resolved_servings[resolved.name] = (
                resolved_servings.get(resolved.name, 0) + servings
            )
            total += resolved.calories * servings
        if self._resolver.reaches(resolved_servings, key):
            raise ValidationError(
                f"Composite food '{key}' would reference itself through its ingredients"
            )
        food = CompositeFood(
            name=key,
            keywords=_keywords(keywords),
            ingredients=resolved_servings,
            calories=total,
        )
        self._put(COMPOSITE, food)
        return food

    def get(self, name: str, namespace: str | None = None) -> FoodRecord | None:
        """Return a food by name, basic foods taking precedence."""
        if namespace is None:
            return self._resolver.lookup(name)
        if namespace not in NAMESPACES:
            raise ValidationError(f"Unknown namespace '{namespace}'")
        return self.state.namespace(namespace).get(canonical_name(name))

    def snapshot(self, name: str, namespace: str | None = None) -> FoodSnapshot:
        """Return a detached copy of a food's details for logging."""
        record = self.get(name, namespace)
        if record is None:
            raise NotFoundError(f"Food '{canonical_name(name)}' not found")
        return FoodSnapshot.of(record)

    def search(self, keywords: Sequence[str], match_all: bool = True) -> SearchResults:
        """Search foods by keyword substrings."""
        return self._index.search(keywords, match_all)

    def get_all(self) -> SearchResults:
        """Return every food, partitioned by namespace."""
        return SearchResults(
            basic=list(self.state.basic.values()),
            composite=list(self.state.composite.values()),
        )

    def undo(self) -> bool:
        if not self.commands.undo():
            return False
        self._save()
        return True

    def redo(self) -> bool:
        if not self.commands.redo():
            return False
        self._save()
        return True

    def can_undo(self) -> bool:
        return self.commands.can_undo()

    def can_redo(self) -> bool:
        return self.commands.can_redo()

    def reload(self) -> None:
        """Re-read the catalog from the repository and drop undo history."""
        self.state.replace_with(self.repository.load())
        self.commands.clear()
        self.dirty = False

    def close(self) -> None:
        """Write the catalog a final time; raises if it cannot be saved."""
        self.repository.save(self.state)
        self.dirty = False

    def _put(self, namespace: str, food: FoodRecord) -> None:
        previous = self.state.namespace(namespace).get(food.name)
        self.commands.execute(
            PutFoodCommand(
                namespace=namespace, name=food.name, record=food, previous=previous
            )
        )
        logger.info(
            "%s food '%s' %s",
            namespace.capitalize(),
            food.name,
            "updated" if previous is not None else "added",
        )
        self._save()

    def _save(self) -> None:
        try:
            self.repository.save(self.state)
        except PersistenceError as exc:
            self.dirty = True
            logger.warning("Catalog kept in memory only: %s", exc)
            return
        self.dirty = False


def _require_name(name: str) -> str:
    key = canonical_name(name) if isinstance(name, str) else ""
    if not key:
        raise ValidationError("Food name must not be empty")
    return key


def _keywords(keywords: Sequence[str]) -> tuple[str, ...]:
    if isinstance(keywords, str) or not all(isinstance(k, str) for k in keywords):
        raise ValidationError("Keywords must be a sequence of strings")
    return tuple(keywords)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
