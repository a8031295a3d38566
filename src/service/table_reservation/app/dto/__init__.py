"""Application layer DTOs"""

from src.service.table_reservation.app.dto.availability_report import AvailabilityReport

__all__ = ['AvailabilityReport']
