"""
Parcel Status Enumeration.
"""

import enum
from typing import Optional


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.

    Status flow:
        REGISTERED → SENT → DELIVERED

    The store does not enforce the flow; only address changes and
    deletion are restricted to REGISTERED.
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"

    def next(self) -> Optional["ParcelStatus"]:
        """Following status in the flow, or None for DELIVERED."""
        return _NEXT_STATUS.get(self)


_NEXT_STATUS = {
    ParcelStatus.REGISTERED: ParcelStatus.SENT,
    ParcelStatus.SENT: ParcelStatus.DELIVERED,
}
