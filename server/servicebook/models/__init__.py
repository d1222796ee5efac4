"""Database models for the application."""

from servicebook.records.catalog import ServiceType
from servicebook.models.service_record import ServiceRecord

__all__ = ["ServiceRecord", "ServiceType"]
