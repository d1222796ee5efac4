"""Service record model."""

from servicebook.models.base import Base, TimestampMixin
from servicebook.records.decoder import decode
from servicebook.records.types import StoredServiceRecord, StructuredServiceRecord
from sqlalchemy import JSON, Column, Integer, String, Text


class ServiceRecord(Base, TimestampMixin):
    """Service record model for work performed on a vehicle.

    Services and their items are kept in three flat columns:
    - service_type: comma-separated service labels
    - parts_used: JSON array of every item, tagged with its service label
    - technician_notes: notes, optionally prefixed with JSON metadata

    Cost is not stored; it is recomputed from parts_used when displayed.
    """

    __tablename__ = "service_records"

    # Primary Identity
    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, index=True)

    # Service Performed
    service_type = Column(String(500), nullable=False, default="")
    parts_used = Column(JSON, default=list)
    technician_notes = Column(Text)
    description = Column(Text)
    mileage = Column(Integer)

    def to_stored(self) -> StoredServiceRecord:
        return StoredServiceRecord(
            service_type=self.service_type or "",
            parts_used=self.parts_used,
            technician_notes=self.technician_notes,
            description=self.description,
            mileage=self.mileage,
        )

    def apply_stored(self, stored: StoredServiceRecord) -> None:
        for column, value in stored.to_row().items():
            setattr(self, column, value)

    def structured(self) -> StructuredServiceRecord:
        return decode(self.to_stored())

    def __repr__(self):
        return (
            f"<ServiceRecord(id={self.id}, vehicle_id={self.vehicle_id}, "
            f"service_type='{self.service_type}')>"
        )
