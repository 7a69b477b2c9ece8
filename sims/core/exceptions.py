"""
Domain exceptions for the SIMS application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class SIMSError(Exception):
    """Base exception for all SIMS errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(SIMSError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidInputError(ValidationError):
    """A required field is missing or out of range."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(field, message, value)
        self.code = "INVALID_INPUT"


# Not-found Exceptions
class NotFoundError(SIMSError):
    """Referenced entity does not exist."""

    entity = "entity"

    def __init__(self, entity_id: int | str):
        super().__init__(
            f"{self.entity.replace('_', ' ').capitalize()} not found: {entity_id}",
            code=f"{self.entity.upper()}_NOT_FOUND",
            details={f"{self.entity}_id": entity_id},
        )


class ProductNotFoundError(NotFoundError):
    entity = "product"


class InventoryItemNotFoundError(NotFoundError):
    entity = "inventory_item"


class ProductionBatchNotFoundError(NotFoundError):
    entity = "production_batch"


class DistributionNotFoundError(NotFoundError):
    entity = "distribution"


class PaymentNotFoundError(NotFoundError):
    entity = "payment"


# Stock Exceptions
class StockError(SIMSError):
    """Base exception for quantity guards."""

    pass


class InsufficientStockError(StockError):
    """Requested decrement exceeds the item's current quantity."""

    def __init__(self, item_id: int, requested: float, available: float):
        super().__init__(
            f"Insufficient stock for item {item_id}: requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "requested": requested,
                "available": available,
            },
        )


class InsufficientRemainingError(StockError):
    """Import quantity exceeds the batch's remaining units."""

    def __init__(self, batch_id: int, requested: float, remaining: float):
        super().__init__(
            f"Batch {batch_id} has {remaining} units remaining, cannot import {requested}",
            code="INSUFFICIENT_REMAINING",
            details={
                "batch_id": batch_id,
                "requested": requested,
                "remaining": remaining,
            },
        )


# Storage Exceptions
class StorageError(SIMSError):
    """Base exception for storage operations."""

    pass


class StorageUnavailableError(StorageError):
    """Persistence layer could not be reached or is locked."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Storage unavailable during {operation}: {reason}",
            code="STORAGE_UNAVAILABLE",
            details={"operation": operation, "reason": reason},
        )


class SequenceAllocationError(StorageError):
    """The identifier allocator could not produce an id."""

    def __init__(self, sequence_name: str, reason: str):
        super().__init__(
            f"Could not allocate id from sequence '{sequence_name}': {reason}",
            code="SEQUENCE_ALLOCATION_FAILED",
            details={"sequence": sequence_name, "reason": reason},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(SIMSError):
    """Configuration error."""

    pass
