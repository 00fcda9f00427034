"""
Parcel lifecycle demo.

Walks one client through registration, address change, status progression
and deletion against the configured database. Run with:

    python -m tracker.demo
"""

import asyncio
import logging

from tracker.app.core.config import settings
from tracker.app.core.exceptions import AppException
from tracker.app.core.observability import configure_logging
from tracker.app.db.session import AsyncSessionLocal, engine, init_db
from tracker.app.services.parcel_service import ParcelService
from tracker.app.services.parcel_store import ParcelStore

logger = logging.getLogger("tracker.demo")


async def run_demo(client: int = 1, address: str = "Psk, Ocean st. 4, apt. 52"):
    """
    Run the lifecycle against the configured database.

    Deleting a parcel that has already been sent is expected to fail;
    the refusal is logged and the demo continues.
    """
    await init_db()
    service = ParcelService(ParcelStore(AsyncSessionLocal))

    parcel = await service.register(client, address)

    await service.change_address(parcel.number, "Saratov, Verkhnyaya st. 3")
    await service.next_status(parcel.number)
    await service.client_parcels(client)

    try:
        await service.delete(parcel.number)
    except AppException as e:
        logger.warning("Delete refused for parcel #%d: %s", parcel.number, e.message)

    await service.client_parcels(client)

    parcel = await service.register(client, address)
    await service.delete(parcel.number)

    await service.client_parcels(client)


async def main():
    configure_logging(settings.log_level)
    try:
        await run_demo()
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
