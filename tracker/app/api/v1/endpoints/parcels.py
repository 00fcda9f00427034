"""
Parcel API Endpoints.

Registration, lookup, status progression, address changes and deletion.
Store errors are rendered by the global exception handlers.
"""

from typing import List
from fastapi import APIRouter, Depends, Path, Response, status
from tracker.app.core.dependencies import get_parcel_service
from tracker.app.schemas.parcel import ParcelRegister, ParcelResponse, AddressUpdate, StatusUpdate
from tracker.app.services.parcel_service import ParcelService

router = APIRouter(tags=["Parcels"])


@router.post("/parcels", response_model=ParcelResponse, status_code=status.HTTP_201_CREATED)
async def register_parcel(
    parcel_data: ParcelRegister,
    service: ParcelService = Depends(get_parcel_service)
):
    """Register a new parcel in the REGISTERED status."""
    parcel = await service.register(parcel_data.client, parcel_data.address)
    return ParcelResponse.model_validate(parcel)


@router.get("/parcels/{number}", response_model=ParcelResponse)
async def get_parcel(
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    parcel = await service.get(number)
    return ParcelResponse.model_validate(parcel)


@router.get("/clients/{client}/parcels", response_model=List[ParcelResponse])
async def list_client_parcels(
    client: int = Path(..., description="Client identifier"),
    service: ParcelService = Depends(get_parcel_service)
):
    """List every parcel of a client. Order is not guaranteed."""
    parcels = await service.client_parcels(client)
    return [ParcelResponse.model_validate(p) for p in parcels]


@router.post("/parcels/{number}/next-status", response_model=ParcelResponse)
async def advance_parcel_status(
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Move a parcel to the next status.

    A delivered parcel is returned unchanged.
    """
    await service.next_status(number)
    parcel = await service.get(number)
    return ParcelResponse.model_validate(parcel)


@router.patch("/parcels/{number}/status", status_code=status.HTTP_204_NO_CONTENT)
async def set_parcel_status(
    status_data: StatusUpdate,
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Overwrite the status without flow checks. Unknown numbers are ignored."""
    await service.set_status(number, status_data.status)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/parcels/{number}/address", response_model=ParcelResponse)
async def change_parcel_address(
    address_data: AddressUpdate,
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Change the address. Only registered parcels accept a new address."""
    await service.change_address(number, address_data.address)
    parcel = await service.get(number)
    return ParcelResponse.model_validate(parcel)


@router.delete("/parcels/{number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_parcel(
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Delete a registered parcel."""
    await service.delete(number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
