"""
Parcel Pydantic schemas.

Defines the store input model and the request and response models of
the HTTP layer.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field
from tracker.app.models.parcel_enums import ParcelStatus


def utc_timestamp() -> str:
    """Current UTC time as an RFC3339 string with a ``Z`` suffix."""
    return datetime.now(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


class ParcelCreate(BaseModel):
    """Schema for a parcel about to be stored. The number is assigned by storage."""
    client: int
    status: str = ParcelStatus.REGISTERED.value
    address: str
    created_at: str = Field(default_factory=utc_timestamp)


class ParcelRegister(BaseModel):
    """Schema for registering a new parcel over HTTP."""
    client: int = Field(..., description="Owning client identifier")
    address: str = Field(..., description="Delivery address")


class AddressUpdate(BaseModel):
    """Schema for changing a parcel's delivery address."""
    address: str


class StatusUpdate(BaseModel):
    """Schema for overwriting a parcel's status."""
    status: str


class ParcelResponse(BaseModel):
    """Schema for parcel response."""
    number: int
    client: int
    status: str
    address: str
    created_at: str

    class Config:
        from_attributes = True
