"""
Parcel database model.

A single ``parcel`` table holds every tracked shipment.
"""

from sqlalchemy import Column, Integer, String
from tracker.app.db.session import Base


class Parcel(Base):
    """
    Parcel model.

    ``status`` is stored as plain text: the conventional values live in
    ``ParcelStatus`` but any string may be written. ``created_at`` is an
    RFC3339 string supplied by the caller.
    """
    __tablename__ = "parcel"
    # Numbers of deleted parcels must never be handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    number = Column(Integer, primary_key=True, autoincrement=True)
    client = Column(Integer, nullable=False, index=True)
    status = Column(String, nullable=False)
    address = Column(String, nullable=False)
    created_at = Column(String, nullable=False)

    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status}')>"
