"""JSON file implementation for the food catalog."""

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, TypeAdapter

from diet_manager.adapters.json_files import Document, read_document, write_document
from diet_manager.domain.foods import (
    BasicFood,
    CatalogState,
    CompositeFood,
    canonical_name,
)
from diet_manager.services.catalog import CatalogRepository


class BasicFoodDocument(Document):
    keywords: list[str] = Field(default_factory=list)
    calories: int = Field(gt=0)


class CompositeFoodDocument(Document):
    keywords: list[str] = Field(default_factory=list)
    ingredients: dict[str, int] = Field(default_factory=dict)
    calories: int = Field(ge=0)


class CatalogDocument(Document):
    basic: dict[str, BasicFoodDocument] = Field(default_factory=dict)
    composite: dict[str, CompositeFoodDocument] = Field(default_factory=dict)


_SCHEMA = TypeAdapter(CatalogDocument)


@dataclass
class JsonCatalogRepository(CatalogRepository):
    """Catalog stored as ``{"basic": {...}, "composite": {...}}``."""

    path: Path

    def load(self) -> CatalogState:
        """Return the stored catalog, empty when the file is missing."""
        document = read_document(self.path, _SCHEMA)
        if document is None:
            return CatalogState()
        return _parse_catalog(document)

    def save(self, state: CatalogState) -> None:
        """Rewrite the whole catalog file."""
        write_document(self.path, _SCHEMA, _dump_catalog(state))


def _parse_catalog(document: CatalogDocument) -> CatalogState:
    state = CatalogState()
    for name, row in document.basic.items():
        key = canonical_name(name)
        state.basic[key] = BasicFood(
            name=key, keywords=tuple(row.keywords), calories=row.calories
        )
    for name, row in document.composite.items():
        key = canonical_name(name)
        state.composite[key] = CompositeFood(
            name=key,
            keywords=tuple(row.keywords),
            ingredients={
                canonical_name(ingredient): servings
                for ingredient, servings in row.ingredients.items()
            },
            calories=row.calories,
        )
    return state


def _dump_catalog(state: CatalogState) -> CatalogDocument:
    return CatalogDocument(
        basic={
            name: BasicFoodDocument(
                keywords=list(food.keywords), calories=food.calories
            )
            for name, food in state.basic.items()
        },
        composite={
            name: CompositeFoodDocument(
                keywords=list(food.keywords),
                ingredients=dict(food.ingredients),
                calories=food.calories,
            )
            for name, food in state.composite.items()
        },
    )
