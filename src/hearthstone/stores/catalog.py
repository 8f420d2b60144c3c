"""
Recipe Catalog.

Read-only collection of recipes. Defaults to the bundled sample recipes;
refresh() can replace them with a remote catalog, cached in the
key-value store.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Iterator

from pydantic import ValidationError

from hearthstone.data import SAMPLE_RECIPES
from hearthstone.models import Difficulty, Recipe
from hearthstone.storage import RECIPES_CACHE_KEY, KeyValueStore

logger = logging.getLogger(__name__)

RecipeFetcher = Callable[[], Awaitable[list[dict[str, Any]]]]


class RecipeCatalog:
    """Enumerable set of Recipe records."""

    def __init__(self, recipes: list[Recipe] | None = None):
        self.recipes: list[Recipe] = list(SAMPLE_RECIPES if recipes is None else recipes)
        self.source = "bundled" if recipes is None else "custom"

    def __len__(self) -> int:
        return len(self.recipes)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self.recipes)

    def get(self, recipe_id: str) -> Recipe | None:
        return next((r for r in self.recipes if r.id == recipe_id), None)

    def filter(
        self,
        cuisine: str | None = None,
        difficulty: Difficulty | None = None,
        tag: str | None = None,
        max_total_time: int | None = None,
    ) -> list[Recipe]:
        """Recipes matching every given criterion (case-insensitive text match)."""
        results = self.recipes
        if cuisine:
            results = [r for r in results if r.cuisine.lower() == cuisine.lower()]
        if difficulty:
            results = [r for r in results if r.difficulty == difficulty]
        if tag:
            results = [r for r in results if tag.lower() in (t.lower() for t in r.tags)]
        if max_total_time is not None:
            results = [r for r in results if r.total_time <= max_total_time]
        return list(results)

    def within_time(self, max_total_time: int) -> list[Recipe]:
        return self.filter(max_total_time=max_total_time)

    def cuisines(self) -> list[str]:
        return sorted({r.cuisine for r in self.recipes if r.cuisine})

    # =========================================================================
    # Remote catalog
    # =========================================================================

    async def refresh(
        self,
        kv: KeyValueStore,
        fetch: RecipeFetcher,
        max_age_minutes: int = 60,
        now: datetime | None = None,
    ) -> str:
        """
        Load recipes from a remote source, using the cache when it is fresh.

        Fallback order on fetch failure: cached copy (even if stale), then
        the bundled samples.

        Returns:
            Where the recipes came from: "cache", "remote", "stale-cache" or "bundled"
        """
        now = now or datetime.now()
        cached = await kv.get(RECIPES_CACHE_KEY)
        cached_recipes = _parse_recipes(cached.get("recipes", [])) if cached else []

        if cached_recipes and now - cached["fetched_at"] < timedelta(minutes=max_age_minutes):
            self._replace(cached_recipes, "cache")
            return self.source

        try:
            rows = await fetch()
            recipes = _parse_recipes(rows)
            if not recipes:
                raise ValueError("remote catalog returned no usable recipes")
        except Exception as e:
            logger.warning(f"Recipe fetch failed, falling back: {e}")
            if cached_recipes:
                self._replace(cached_recipes, "stale-cache")
            else:
                self._replace(list(SAMPLE_RECIPES), "bundled")
            return self.source

        await kv.set(
            RECIPES_CACHE_KEY,
            {"fetched_at": now, "recipes": [r.model_dump() for r in recipes]},
        )
        self._replace(recipes, "remote")
        return self.source

    def _replace(self, recipes: list[Recipe], source: str) -> None:
        self.recipes = recipes
        self.source = source
        logger.info(f"Recipe catalog loaded {len(recipes)} recipes from {source}")


def _parse_recipes(rows: list[dict[str, Any]]) -> list[Recipe]:
    """Validate raw rows, skipping any that do not fit the Recipe shape."""
    recipes = []
    for row in rows:
        try:
            recipes.append(Recipe.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed recipe {row.get('id', '?')}: {e.error_count()} errors")
    return recipes
