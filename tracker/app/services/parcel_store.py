"""
Parcel store.

Sole mediator between the application and the ``parcel`` table. Each
operation opens its own session, runs a single statement and commits,
so the store keeps no state besides the session factory and can be
shared between concurrent callers.

Address changes and deletion are gated on the ``registered`` status
inside the statement itself (``... WHERE number = ? AND status = ?``).
A separate read before the write would let the status change in between.
"""

from typing import List
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from tracker.app.core.exceptions import StorageError, ParcelNotFoundError, PreconditionFailedError
from tracker.app.models.parcel import Parcel
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate


class ParcelStore:

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def add(self, parcel: ParcelCreate) -> int:
        """
        Insert a new parcel.

        Args:
            parcel: Parcel data; contents are stored as given

        Returns:
            Number assigned by storage

        Raises:
            StorageError: If the insert fails
        """
        row = Parcel(
            client=parcel.client,
            status=parcel.status,
            address=parcel.address,
            created_at=parcel.created_at,
        )
        try:
            async with self.session_factory() as session:
                session.add(row)
                await session.flush()
                number = row.number
                await session.commit()
                return number
        except SQLAlchemyError as e:
            raise StorageError(f"error adding parcel: {e}") from e

    async def get(self, number: int) -> Parcel:
        """
        Fetch one parcel by number.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            StorageError: If the query fails
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Parcel).where(Parcel.number == number)
                )
                parcel = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"error getting parcel: {e}") from e

        if parcel is None:
            raise ParcelNotFoundError(number)
        return parcel

    async def get_by_client(self, client: int) -> List[Parcel]:
        """
        Fetch every parcel of a client.

        Rows come back in storage order; callers must not rely on it.
        An unknown client yields an empty list.
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Parcel).where(Parcel.client == client)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StorageError(f"error getting client parcels: {e}") from e

    async def set_status(self, number: int, status: str) -> None:
        """
        Overwrite the status of a parcel.

        Any string is accepted. Updating a missing number is a no-op.
        """
        try:
            async with self.session_factory() as session:
                await session.execute(
                    update(Parcel)
                    .where(Parcel.number == number)
                    .values(status=status)
                    .execution_options(synchronize_session=False)
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"error setting status: {e}") from e

    async def set_address(self, number: int, address: str) -> None:
        """
        Change the delivery address of a registered parcel.

        Raises:
            PreconditionFailedError: If the parcel is missing or not registered
            StorageError: If the update fails
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    update(Parcel)
                    .where(Parcel.number == number, Parcel.status == ParcelStatus.REGISTERED.value)
                    .values(address=address)
                    .execution_options(synchronize_session=False)
                )
                rows_affected = result.rowcount
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"error setting address: {e}") from e

        if rows_affected == 0:
            raise PreconditionFailedError("can't change address", details={"number": number})

    async def delete(self, number: int) -> None:
        """
        Remove a registered parcel.

        Raises:
            PreconditionFailedError: If the parcel is missing or not registered
            StorageError: If the delete fails
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    delete(Parcel)
                    .where(Parcel.number == number, Parcel.status == ParcelStatus.REGISTERED.value)
                    .execution_options(synchronize_session=False)
                )
                # Read before commit so a failed count rolls the delete back
                rows_affected = result.rowcount
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"error deleting parcel: {e}") from e

        if rows_affected == 0:
            raise PreconditionFailedError(
                "can't delete parcel if status not equal 'registered'",
                details={"number": number},
            )
