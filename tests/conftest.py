# tests/conftest.py
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest

# Додаємо src в sys.path, щоб працював імпорт "pricewatch.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pricewatch.domain.products.entities import DeliveryReport, ProductSnapshot  # noqa: E402
from pricewatch.domain.products.interfaces import IDropNotifier, IProductScraper  # noqa: E402


# ================================
# 🧪 ФЕЙКИ
# ================================
class FakeScraper(IProductScraper):
    """URL → ProductSnapshot або виняток; запамʼятовує виклики."""

    def __init__(self, pages: Optional[Dict[str, Union[ProductSnapshot, float, Exception]]] = None) -> None:
        self.pages: Dict[str, Union[ProductSnapshot, float, Exception]] = dict(pages or {})
        self.calls: List[str] = []
        self.sessions_opened = 0
        self.session_error: Optional[Exception] = None

    @asynccontextmanager
    async def session(self):
        if self.session_error is not None:
            raise self.session_error
        self.sessions_opened += 1
        yield self

    async def scrape(self, url: str) -> ProductSnapshot:
        self.calls.append(url)
        outcome = self.pages[url]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, ProductSnapshot):
            return outcome
        return ProductSnapshot(url=url, title=f"Product {url.rsplit('/', 1)[-1]}", price=float(outcome))


class FakeNotifier(IDropNotifier):
    def __init__(self) -> None:
        self.calls = []

    async def notify(self, events, recipients) -> DeliveryReport:
        self.calls.append((list(events), list(recipients)))
        return DeliveryReport(delivered=len(events) * len(recipients))


class StepClock:
    """Детермінований годинник: кожен виклик +1 хвилина."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(minutes=1)
        return self.now


async def no_sleep(_seconds: float) -> None:
    return None


# ================================
# 🔧 ФІКСТУРИ
# ================================
@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def fake_scraper() -> FakeScraper:
    return FakeScraper()


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()
