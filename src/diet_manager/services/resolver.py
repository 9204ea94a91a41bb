"""Case-insensitive name resolution across the catalog namespaces."""

from collections.abc import Iterable
from dataclasses import dataclass

from diet_manager.domain.foods import (
    COMPOSITE,
    CatalogState,
    FoodRecord,
    canonical_name,
)


@dataclass(frozen=True)
class ResolvedFood:
    """A name resolved to a catalog record."""

    name: str
    namespace: str
    calories: int


@dataclass
class NameResolver:
    """Resolve ingredient names, checking basic foods before composites."""

    state: CatalogState

    def resolve(self, name: str) -> ResolvedFood | None:
        """Return the record ``name`` refers to, or None when unknown."""
        record = self.lookup(name)
        if record is None:
            return None
        return ResolvedFood(
            name=record.name, namespace=record.namespace, calories=record.calories
        )

    def lookup(self, name: str) -> FoodRecord | None:
        key = canonical_name(name)
        basic = self.state.basic.get(key)
        if basic is not None:
            return basic
        return self.state.composite.get(key)

    def reaches(self, ingredients: Iterable[str], target: str) -> bool:
        """Return True if any ingredient leads back to composite ``target``.

        Ingredient names are followed with the same basic-first precedence
        used by :meth:`resolve`, so a basic food shadowing a composite of the
        same name ends the walk.
        """
        target = canonical_name(target)
        pending = [canonical_name(name) for name in ingredients]
        visited: set[str] = set()
        while pending:
            name = pending.pop()
            if name in visited:
                continue
            visited.add(name)
            resolved = self.resolve(name)
            if resolved is None or resolved.namespace != COMPOSITE:
                continue
            if resolved.name == target:
                return True
            pending.extend(self.state.composite[resolved.name].ingredients)
        return False
