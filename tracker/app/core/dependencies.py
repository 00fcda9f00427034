"""
Service dependencies for FastAPI.

Wires the parcel store and service onto the configured session factory.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import async_sessionmaker
from tracker.app.db.session import get_session_factory
from tracker.app.services.parcel_store import ParcelStore
from tracker.app.services.parcel_service import ParcelService


async def get_parcel_store(
    session_factory: async_sessionmaker = Depends(get_session_factory)
) -> ParcelStore:
    return ParcelStore(session_factory)


async def get_parcel_service(
    store: ParcelStore = Depends(get_parcel_store)
) -> ParcelService:
    return ParcelService(store)
