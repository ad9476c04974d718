"""
Service interfaces for dependency inversion.
Allows swapping storage implementations without changing business logic.
"""

from .store import BookingStore, ConstraintViolation, RecordNotFound, StoreError

__all__ = ['BookingStore', 'StoreError', 'RecordNotFound', 'ConstraintViolation']
