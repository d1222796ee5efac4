"""Service record tools: load, create and update records through the codec."""

import logging
from typing import Any, Dict, Optional

from servicebook.config import settings
from servicebook.models.service_record import ServiceRecord
from servicebook.records.catalog import display_label, to_form_selection
from servicebook.records.cost import subtotal, total_cost
from servicebook.records.encoder import encode
from servicebook.records.parts import all_tagged, narrow_parts
from servicebook.records.types import StructuredServiceRecord, has_oil_change
from servicebook.records.validation import ServiceRecordValidationError, ensure_valid
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


def serialize_record(row: ServiceRecord) -> Dict[str, Any]:
    """Decode a stored row into the structure shown on cards and detail views."""
    record = row.structured()
    return {
        "id": row.id,
        "vehicle_id": row.vehicle_id,
        "services": [
            {
                "service_type": entry.resolved_label,
                "display_label": display_label(entry.resolved_label),
                "selection": to_form_selection(entry.resolved_label),
                "items": [
                    {"name": item.name, "quantity": item.quantity, "price": item.price}
                    for item in entry.items
                ],
                "subtotal": subtotal(entry),
            }
            for entry in record.services
        ],
        "description": record.description,
        "technician_notes": record.technician_notes,
        "next_oil_change_mileage": record.next_oil_change_mileage,
        "has_oil_change": has_oil_change(record),
        "next_oil_change_label": settings.distance_label(),
        "mileage": record.mileage,
        "total_cost": total_cost(record.services),
        "currency": settings.CURRENCY_CODE,
    }


def _validation_failure(error: ServiceRecordValidationError) -> Dict[str, Any]:
    logger.warning(f"Service record rejected: {error}")
    return {
        "success": False,
        "error": str(error),
        "errors": error.errors,
        "message": "Required fields missing",
    }


# ============================================================================
# Tool 1: Load Service Record
# ============================================================================


async def get_service_record(db: AsyncSession, record_id: int) -> Optional[Dict[str, Any]]:
    """
    Load a service record and decode it for display or editing.

    Args:
        db: Database session
        record_id: Service record ID

    Returns:
        Decoded record (see serialize_record) or None if not found
    """
    try:
        row = await db.get(ServiceRecord, record_id)
        if not row:
            logger.info(f"Service record {record_id} not found")
            return None

        return serialize_record(row)

    except Exception as e:
        logger.error(f"Error loading service record {record_id}: {e}", exc_info=True)
        raise


# ============================================================================
# Tool 2: Create Service Record
# ============================================================================


async def create_service_record(
    db: AsyncSession, vehicle_id: int, record: StructuredServiceRecord
) -> Dict[str, Any]:
    """
    Validate, encode and insert a new service record.

    Args:
        db: Database session
        vehicle_id: Vehicle the work was performed on
        record: Structured record from the form

    Returns:
        Dict with result:
            {
                "success": bool,
                "data": dict (decoded record, on success),
                "error": str (on failure),
                "message": str
            }
    """
    try:
        ensure_valid(record)
    except ServiceRecordValidationError as e:
        return _validation_failure(e)

    try:
        row = ServiceRecord(vehicle_id=vehicle_id)
        row.apply_stored(encode(record))
        db.add(row)

        await db.commit()
        await db.refresh(row)

        logger.info(f"Service record {row.id} created for vehicle {vehicle_id}")

        return {
            "success": True,
            "data": serialize_record(row),
            "message": "Service record created",
        }

    except Exception as e:
        logger.error(f"Error creating service record: {e}", exc_info=True)
        await db.rollback()
        return {"success": False, "error": str(e), "message": "Failed to create service record"}


# ============================================================================
# Tool 3: Update Service Record
# ============================================================================


async def save_service_record(
    db: AsyncSession, record_id: int, record: StructuredServiceRecord
) -> Dict[str, Any]:
    """
    Validate, encode and store an edited service record.

    Args:
        db: Database session
        record_id: Service record ID to update
        record: Structured record from the edit form

    Returns:
        Dict with result, same shape as create_service_record
    """
    try:
        ensure_valid(record)
    except ServiceRecordValidationError as e:
        return _validation_failure(e)

    try:
        row = await db.get(ServiceRecord, record_id)
        if not row:
            logger.warning(f"Service record {record_id} not found")
            return {
                "success": False,
                "error": f"Service record ID {record_id} not found",
                "message": "Service record not found",
            }

        row.apply_stored(encode(record))

        await db.commit()
        await db.refresh(row)

        logger.info(f"Service record {record_id} updated")

        return {
            "success": True,
            "data": serialize_record(row),
            "message": "Changes saved successfully",
        }

    except Exception as e:
        logger.error(f"Error updating service record {record_id}: {e}", exc_info=True)
        await db.rollback()
        return {"success": False, "error": str(e), "message": "Failed to update service record"}


# ============================================================================
# Tool 4: Tag Legacy Records
# ============================================================================


async def retag_legacy_records(db: AsyncSession) -> Dict[str, Any]:
    """
    Rewrite records whose items lack service type tags.

    Each legacy row is decoded (all items land on its first service) and
    encoded again, so the stored grouping matches what the edit form shows.
    Rows that are already fully tagged or have no items are left alone.

    Returns:
        Dict with result:
            {
                "success": bool,
                "data": {"scanned": int, "updated": int},
                "message": str
            }
    """
    try:
        result = await db.execute(select(ServiceRecord).order_by(ServiceRecord.id))
        rows = result.scalars().all()

        updated = 0
        for row in rows:
            parts = narrow_parts(row.parts_used)
            if not parts or all_tagged(parts):
                continue
            record = row.structured()
            if not record.services[0].resolved_label:
                logger.debug(f"Service record {row.id} has no service type, leaving untagged")
                continue
            row.apply_stored(encode(record))
            updated += 1
            logger.debug(f"Tagged items on service record {row.id}")

        if updated:
            await db.commit()

        logger.info(f"Tagged {updated} of {len(rows)} service records")

        return {
            "success": True,
            "data": {"scanned": len(rows), "updated": updated},
            "message": f"Updated {updated} service records",
        }

    except Exception as e:
        logger.error(f"Error tagging legacy service records: {e}", exc_info=True)
        await db.rollback()
        return {"success": False, "error": str(e), "message": "Failed to tag service records"}
