"""
Pytest configuration and fixtures for Hearthstone tests.
"""

import os
import random
from datetime import datetime
from unittest.mock import MagicMock

import pytest

# Set test environment before importing hearthstone modules
os.environ["HEARTHSTONE_ENV"] = "development"
os.environ.pop("SUPABASE_URL", None)
os.environ.pop("SUPABASE_ANON_KEY", None)

from hearthstone.engine import Kitchen
from hearthstone.models import Recipe, RecipeIngredient, RecipeStep
from hearthstone.storage import MemoryStore
from hearthstone.stores import RecipeCatalog

# Wednesday / Saturday
WEEKDAY_NOW = datetime(2026, 10, 14, 18, 0)
WEEKEND_NOW = datetime(2026, 10, 17, 12, 0)


def make_recipe(
    id: str = "recipe-1",
    name: str = "Test Recipe",
    ingredients: list[str] | None = None,
    prep_time: int = 10,
    cook_time: int = 20,
    difficulty: str = "medium",
    cuisine: str = "Italian",
    steps: list[tuple[str, int | None]] | None = None,
    optional: list[str] | None = None,
) -> Recipe:
    """Recipe factory. Ingredient names become 1-unit lines; `optional` marks some optional."""
    optional = optional or []
    names = ingredients if ingredients is not None else ["pasta", "parmesan"]
    step_defs = steps if steps is not None else [("Boil water", 5), ("Cook", 10), ("Serve", None)]
    return Recipe(
        id=id,
        name=name,
        prep_time=prep_time,
        cook_time=cook_time,
        difficulty=difficulty,
        cuisine=cuisine,
        ingredients=[
            RecipeIngredient(name=n, amount=1, unit="cup", optional=n in optional) for n in names
        ],
        steps=[
            RecipeStep(order=i, instruction=text, duration=duration)
            for i, (text, duration) in enumerate(step_defs, 1)
        ],
    )


@pytest.fixture
def now():
    return WEEKDAY_NOW


@pytest.fixture
def weekend_now():
    return WEEKEND_NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def kv():
    return MemoryStore()


@pytest.fixture
def recipe():
    return make_recipe()


@pytest.fixture
def small_catalog():
    return RecipeCatalog([
        make_recipe(id="r-quick", name="Quick Pasta", prep_time=5, cook_time=10, difficulty="easy"),
        make_recipe(id="r-mid", name="Chicken Curry", ingredients=["chicken breast", "onion"],
                    prep_time=15, cook_time=25, cuisine="Indian"),
        make_recipe(id="r-long", name="Braise", ingredients=["beef chuck", "carrots"],
                    prep_time=30, cook_time=180, difficulty="hard", cuisine="French"),
    ])


@pytest.fixture
def kitchen(now, small_catalog):
    return Kitchen(
        MemoryStore(),
        rng=random.Random(7),
        clock=lambda: now,
        catalog=small_catalog,
    )


@pytest.fixture
def sample_inventory_items():
    """Sample inventory rows as they come back from Supabase."""
    return [
        {"id": "inv-1", "name": "milk", "quantity": 2, "unit": "l", "location": "fridge",
         "expiry_date": "2026-10-16T00:00:00", "created_at": "2026-10-10T09:00:00Z",
         "category": "dairy", "emoji": "🥛"},
        {"id": "inv-2", "name": "eggs", "quantity": 12, "unit": "count", "location": "fridge",
         "expiry_date": None, "created_at": "2026-10-10T09:00:00Z", "category": "protein"},
        {"id": "inv-3", "name": "flour", "quantity": 1, "unit": "kg", "location": "pantry",
         "expiry_date": None, "created_at": "2026-10-01T09:00:00Z", "category": "grains"},
    ]


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.gt.return_value = mock_table
    mock_table.order.return_value = mock_table
    mock_table.limit.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client
