import os

os.environ["ENABLE_TRACING"] = "false"
os.environ["JSON_LOGS"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timezone  # noqa: E402
from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.db.models import Category, Donation  # noqa: E402
from app.db.seed import build_default_dataset  # noqa: E402
from app.db.store import DonationDataset  # noqa: E402
from app.main import create_application  # noqa: E402
from app.services.analytics import AnalyticsService  # noqa: E402
from app.services.reports import ReportService  # noqa: E402


@pytest.fixture
def dataset() -> DonationDataset:
    return build_default_dataset()


@pytest.fixture
def analytics(dataset: DonationDataset) -> AnalyticsService:
    return AnalyticsService(dataset)


@pytest.fixture
def reports(analytics: AnalyticsService) -> ReportService:
    return ReportService(analytics)


@pytest.fixture
def empty_dataset() -> DonationDataset:
    return DonationDataset([], [])


@pytest.fixture
def sparse_dataset() -> DonationDataset:
    """A dataset with empty categories, missing names and a data anomaly."""
    categories = [
        Category(id="a", name="Cobertores", measure_unity="peças"),
        Category(id="b", name="Higiene", measure_unity="unidades"),
        Category(id="c", name="Vazia", measure_unity="kg"),
    ]
    donations = [
        Donation(
            id="d-1",
            category_id="a",
            name="Cobertor",
            initial_quantity=10,
            current_quantity=1,
            created_at=datetime(2024, 3, 31, 23, 0, tzinfo=timezone.utc),
        ),
        Donation(
            id="d-2",
            category_id="b",
            name="Sabonete",
            initial_quantity=10,
            current_quantity=12,
            donator_name="",
            gender="",
            created_at=datetime(2023, 12, 2, tzinfo=timezone.utc),
        ),
        Donation(
            id="d-3",
            category_id="a",
            name="Manta",
            initial_quantity=0,
            current_quantity=0,
            donator_name="Ana",
            gender="Feminino",
            created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
    ]
    return DonationDataset(categories, donations)


@pytest.fixture
def application(dataset: DonationDataset) -> FastAPI:
    return create_application(dataset=dataset)


@pytest_asyncio.fixture(scope="function")
async def client(application: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
