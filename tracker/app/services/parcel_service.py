"""
Parcel service (Domain Logic).

Registration, status progression and reporting on top of the parcel store.
"""

import logging
from typing import List, Optional

from tracker.app.models.parcel import Parcel
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate
from tracker.app.services.parcel_store import ParcelStore

logger = logging.getLogger("tracker.parcels")


class ParcelService:

    def __init__(self, store: ParcelStore):
        self.store = store

    async def register(self, client: int, address: str) -> Parcel:
        """
        Register a new parcel for a client.

        The parcel starts in REGISTERED with ``created_at`` set to now (UTC).

        Returns:
            The stored parcel, number included
        """
        number = await self.store.add(ParcelCreate(client=client, address=address))
        parcel = await self.store.get(number)

        logger.info(
            "New parcel #%d registered for client %d at address %s on %s",
            parcel.number, parcel.client, parcel.address, parcel.created_at,
        )
        return parcel

    async def get(self, number: int) -> Parcel:
        return await self.store.get(number)

    async def client_parcels(self, client: int) -> List[Parcel]:
        """Return and log every parcel of a client."""
        parcels = await self.store.get_by_client(client)

        logger.info("Client %d parcels: %d", client, len(parcels))
        for parcel in parcels:
            logger.info(
                "Parcel #%d to %s, registered %s, status %s",
                parcel.number, parcel.address, parcel.created_at, parcel.status,
            )
        return parcels

    async def next_status(self, number: int) -> Optional[str]:
        """
        Advance a parcel one step: REGISTERED → SENT → DELIVERED.

        Returns:
            The new status, or None when the parcel is already delivered
            or carries a status outside the known flow

        Raises:
            ParcelNotFoundError: If the parcel does not exist
        """
        parcel = await self.store.get(number)

        try:
            current = ParcelStatus(parcel.status)
        except ValueError:
            logger.warning("Parcel #%d has unknown status %r, leaving it as is", number, parcel.status)
            return None

        following = current.next()
        if following is None:
            return None

        await self.store.set_status(number, following.value)
        logger.info("Parcel #%d new status: %s", number, following.value)
        return following.value

    async def set_status(self, number: int, status: str) -> None:
        """Overwrite the status without checking the flow."""
        await self.store.set_status(number, status)
        logger.info("Parcel #%d status set to %s", number, status)

    async def change_address(self, number: int, address: str) -> None:
        await self.store.set_address(number, address)
        logger.info("Parcel #%d address changed to %s", number, address)

    async def delete(self, number: int) -> None:
        await self.store.delete(number)
        logger.info("Parcel #%d deleted", number)
