"""Keyword search over the food catalog."""

from collections.abc import Sequence
from dataclasses import dataclass

from diet_manager.domain.foods import CatalogState, SearchResults


@dataclass
class SearchIndex:
    """Substring keyword matching over both catalog namespaces."""

    state: CatalogState

    def search(self, keywords: Sequence[str], match_all: bool = True) -> SearchResults:
        """Return foods matching all (or any) of ``keywords``.

        An empty query matches every food in ALL mode and none in ANY mode.
        """
        queries = [keyword.lower() for keyword in keywords]
        return SearchResults(
            basic=[
                food
                for food in self.state.basic.values()
                if _matches(food.keywords, queries, match_all)
            ],
            composite=[
                food
                for food in self.state.composite.values()
                if _matches(food.keywords, queries, match_all)
            ],
        )


def _matches(stored: Sequence[str], queries: list[str], match_all: bool) -> bool:
    folded = [keyword.lower() for keyword in stored]
    hits = (any(query in keyword for keyword in folded) for query in queries)
    if match_all:
        return all(hits)
    return any(hits)
