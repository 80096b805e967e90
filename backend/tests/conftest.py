import itertools

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from prolist.config import Settings
from prolist.document_catalogue.service import DocumentCatalogueService
from prolist.document_lifecycle.locks import KeyedLockRegistry
from prolist.document_lifecycle.service import DocumentLifecycleManager
from prolist.models.base import Base
# Import all models so they register with Base.metadata for create_all
import prolist.models  # noqa: F401
from prolist.renderers.text import PlainTextRenderer
from prolist.schemas.shipment import Company, Party, Product, Shipment, ShipmentItem
from prolist.seeds import seed_demo_data
from prolist.storage.memory import (
    InMemoryDocumentStore,
    InMemoryEventRecorder,
    InMemoryFileStorage,
    InMemorySequenceStore,
    InMemoryShipmentRepository,
)


# ── Database fixtures (SQLite, one file per test) ──


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_session(db_session):
    await seed_demo_data(db_session)
    return db_session


@pytest.fixture
async def client(seeded_session, tmp_path):
    from prolist.config import settings
    from prolist.database import get_db
    from prolist.dependencies import get_lock_registry
    from prolist.main import app

    # Override upload dir to temp
    original_upload_dir = settings.upload_dir
    settings.upload_dir = str(tmp_path / "uploads")

    async def override_get_db():
        yield seeded_session

    # Locks are bound to the running event loop, so each test gets its own.
    locks = KeyedLockRegistry(timeout=1.0)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_registry] = lambda: locks

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    settings.upload_dir = original_upload_dir


# ── Domain fixtures ──


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(id="p_1", name="Cocoa 25kg", hs_code="180100", unit_price_fcfa=85000, weight_kg=25),
        Product(id="p_2", name="Coffee 60kg", hs_code="090111", unit_price_fcfa=105000, weight_kg=60),
        Product(id="p_3", name="Timber 1m³", hs_code="440710", unit_price_fcfa=200000, weight_kg=800),
    ]


@pytest.fixture
def parties() -> list[Party]:
    return [
        Party(id="partner_1", name="EuroFoods SARL", country="FR",
              address="12 Rue de la République, 69002 Lyon, France"),
        Party(id="partner_4", name="Atlantic Imports Ltd", country="UK"),
    ]


@pytest.fixture
def company() -> Company:
    return Company(
        name="ProList Manufacturing Ltd",
        address="Mile 3 Nkwen, Bamenda, Cameroon",
        tin="CM-PL-009988",
    )


@pytest.fixture
def cocoa_to_france() -> Shipment:
    return Shipment(
        id="s_5001",
        reference="PL-2025-EX-0001",
        buyer="EuroFoods SARL",
        incoterm="FOB",
        mode="SEA",
        route="CM → FR",
        value_fcfa=54000000,
        items=[
            ShipmentItem(id="item_1", product_id="p_1", quantity=200),
            ShipmentItem(id="item_2", product_id="p_2", quantity=100),
        ],
    )


@pytest.fixture
def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"id_{next(counter)}"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, default_actor="tester")


@pytest.fixture
def shipment_repo(cocoa_to_france, products, parties, company):
    return InMemoryShipmentRepository([cocoa_to_france], products, parties, company)


@pytest.fixture
def document_store():
    return InMemoryDocumentStore()


@pytest.fixture
def events():
    return InMemoryEventRecorder()


@pytest.fixture
def files():
    return InMemoryFileStorage()


@pytest.fixture
def locks():
    return KeyedLockRegistry(timeout=1.0)


@pytest.fixture
def lifecycle(test_settings, shipment_repo, document_store, events, files, locks, sequential_ids):
    return DocumentLifecycleManager(
        test_settings,
        shipments=shipment_repo,
        documents=document_store,
        sequences=InMemorySequenceStore(),
        events=events,
        files=files,
        renderer=PlainTextRenderer(),
        locks=locks,
        id_factory=sequential_ids,
    )


@pytest.fixture
def catalogue(test_settings, shipment_repo, document_store, events, locks, sequential_ids):
    return DocumentCatalogueService(
        test_settings,
        shipments=shipment_repo,
        documents=document_store,
        events=events,
        locks=locks,
        id_factory=sequential_ids,
    )
