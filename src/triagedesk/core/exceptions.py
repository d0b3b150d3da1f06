"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class ExternalServiceException(ApplicationException):
    """Base exception for external service failures."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class MetricsExportException(ExternalServiceException):
    """Exception for metrics backend failures."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Metrics Exporter", message, details)


class UndefinedSimilarityException(DomainException):
    """Raised when both texts of a similarity comparison have no tokens."""

    def __init__(self, details: Optional[dict] = None):
        super().__init__(
            "Similarity is undefined for two texts without tokens",
            details
        )


class InvalidStatusTransitionException(DomainException):
    """Raised when an inquiry is moved out of a terminal status."""

    def __init__(self, inquiry_id: Optional[str], current: str, target: str):
        self.inquiry_id = inquiry_id
        self.current = current
        self.target = target
        super().__init__(
            f"Inquiry cannot move from '{current}' to '{target}'",
            {"inquiry_id": inquiry_id, "current": current, "target": target}
        )
