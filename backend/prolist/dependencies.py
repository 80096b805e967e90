from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prolist.audit.service import SqlEventRecorder
from prolist.config import Settings, settings
from prolist.database import get_db
from prolist.document_catalogue.service import DocumentCatalogueService
from prolist.document_lifecycle.locks import KeyedLockRegistry
from prolist.document_lifecycle.service import DocumentLifecycleManager
from prolist.renderers.text import PlainTextRenderer
from prolist.schemas.shipment import Company
from prolist.storage.files import LocalFileStorage
from prolist.storage.sql import SqlDocumentStore, SqlSequenceStore, SqlShipmentRepository

# Re-export get_db for use in Depends()
get_db = get_db

# One registry per process: locks must be shared across requests.
_lock_registry = KeyedLockRegistry(timeout=settings.document_lock_timeout_seconds)


def get_settings() -> Settings:
    return settings


def get_lock_registry() -> KeyedLockRegistry:
    return _lock_registry


def company_from_settings(settings: Settings) -> Company:
    return Company(
        name=settings.company_name,
        address=settings.company_address,
        tin=settings.company_tin,
    )


def get_document_catalogue(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    locks: KeyedLockRegistry = Depends(get_lock_registry),
) -> DocumentCatalogueService:
    return DocumentCatalogueService(
        settings,
        shipments=SqlShipmentRepository(db, company_from_settings(settings)),
        documents=SqlDocumentStore(db),
        events=SqlEventRecorder(db),
        locks=locks,
    )


def get_lifecycle_manager(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    locks: KeyedLockRegistry = Depends(get_lock_registry),
) -> DocumentLifecycleManager:
    return DocumentLifecycleManager(
        settings,
        shipments=SqlShipmentRepository(db, company_from_settings(settings)),
        documents=SqlDocumentStore(db),
        sequences=SqlSequenceStore(db),
        events=SqlEventRecorder(db),
        files=LocalFileStorage(settings.upload_dir),
        renderer=PlainTextRenderer(),
        locks=locks,
    )
