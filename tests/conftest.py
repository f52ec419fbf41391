import random
from datetime import datetime, timedelta, timezone

import pytest

from reco_engine.core.config import Settings, get_settings

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class ScriptedRandom(random.Random):
    """random() returns the scripted draws in order, cycling."""

    def __init__(self, draws):
        super().__init__(0)
        self._draws = list(draws)
        self._i = 0

    def random(self):
        value = self._draws[self._i % len(self._draws)]
        self._i += 1
        return value


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def now():
    return NOW


def created(days_ago: float) -> dict:
    return {"seconds": (NOW - timedelta(days=days_ago)).timestamp(), "nanoseconds": 0}


def product(pid: str, price: float, stock: int = 5, in_stock: bool = True, **extra) -> dict:
    doc = {"id": pid, "price": price, "stockQuantity": stock, "inStock": in_stock}
    doc.update(extra)
    return doc


def order(total: float, n_items: int = 1, shipping: float = 0, tax: float = 0) -> dict:
    return {"total": total, "items": [{"qty": 1}] * n_items, "shipping": shipping, "tax": tax}
