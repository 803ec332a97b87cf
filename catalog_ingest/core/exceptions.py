"""Custom exceptions for the catalog ingestion application.

This module defines all custom exceptions used throughout the application.
All exceptions inherit from CatalogIngestError for easy catching.

Exception classes include context dictionaries for structured logging
and debugging. Use the `context` property to access additional details.
"""

from typing import Any


class CatalogIngestError(Exception):
    """Base exception for all catalog ingestion errors.

    All custom exceptions in the application should inherit from this class.
    Provides a context dictionary for structured error information.

    Attributes:
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise CatalogIngestError("Something went wrong", context={"slug": "abc"})
        ... except CatalogIngestError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize CatalogIngestError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Database Errors
# ============================================


class DatabaseError(CatalogIngestError):
    """Base exception for database-related errors."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize DatabaseError.

        Args:
            message: Error message
            context: Additional context
            operation: Database operation that failed (e.g., "insert", "update")
        """
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class RecordNotFoundError(DatabaseError):
    """Raised when a database record is not found.

    Attributes:
        model: The model class that was queried
        record_id: The ID (or natural key) that was not found
    """

    def __init__(
        self,
        model: str,
        record_id: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordNotFoundError.

        Args:
            model: Name of the model class
            record_id: ID that was not found
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "record_id": record_id})
        super().__init__(f"{model} with id={record_id} not found", context=ctx)
        self.model = model
        self.record_id = record_id


class RecordAlreadyExistsError(DatabaseError):
    """Raised when an insert collides with an existing natural key.

    Attributes:
        model: The model class
        field: Field that caused the conflict
        value: Value that already exists
    """

    def __init__(
        self,
        model: str,
        field: str,
        value: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordAlreadyExistsError.

        Args:
            model: Name of the model class
            field: Field that caused the conflict
            value: Value that already exists
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "field": field, "value": value})
        super().__init__(
            f"{model} with {field}={value} already exists",
            context=ctx,
            operation="insert",
        )
        self.model = model
        self.field = field
        self.value = value


# ============================================
# Configuration Errors
# ============================================


class ConfigError(CatalogIngestError):
    """Base exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigError.

        Args:
            message: Error message
            config_path: Path to the config file/key
            context: Additional context
        """
        ctx = context or {}
        if config_path:
            ctx["config_path"] = config_path
        super().__init__(message, context=ctx)


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails.

    Supports two usage patterns:
    1. Simple: ConfigValidationError("error message")
    2. Structured: ConfigValidationError(field="name", value="x", reason="invalid")

    Attributes:
        field: Field that failed validation (optional)
        value: Invalid value (optional)
        reason: Validation failure reason (optional)
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        value: Any = None,
        reason: str | None = None,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigValidationError.

        Args:
            message: Error message (for simple usage)
            field: Field that failed validation
            value: Invalid value
            reason: Validation failure reason
            config_path: Path to config file
            context: Additional context
        """
        ctx = context or {}

        self.field = field
        self.value = value
        self.reason = reason

        if field and reason:
            ctx.update({"field": field, "reason": reason})
            if value is not None:
                ctx["value"] = str(value)
            final_message = f"Config validation failed for '{field}': {reason}"
        elif message:
            final_message = message
        else:
            final_message = "Configuration validation failed"

        super().__init__(final_message, config_path=config_path, context=ctx)


class ConfigNotFoundError(ConfigError):
    """Raised when a required configuration is not found.

    Attributes:
        config_key: The configuration key that was not found
    """

    def __init__(
        self,
        config_key: str,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigNotFoundError.

        Args:
            config_key: Configuration key that was not found
            config_path: Path to config file
            context: Additional context
        """
        ctx = context or {}
        ctx["config_key"] = config_key
        super().__init__(
            f"Configuration '{config_key}' not found",
            config_path=config_path,
            context=ctx,
        )
        self.config_key = config_key


# ============================================
# Precondition Errors
# ============================================


class PreconditionError(CatalogIngestError):
    """Base exception for run preconditions.

    A precondition failure aborts the whole run before any catalog write.
    """


class FrameExtractorUnavailableError(PreconditionError):
    """Raised when the frame-extraction executable cannot be found."""

    def __init__(self, executable: str = "ffmpeg") -> None:
        """Initialize FrameExtractorUnavailableError.

        Args:
            executable: Name of the missing executable
        """
        super().__init__(
            f"{executable} is not installed or not on PATH",
            context={"executable": executable},
        )
        self.executable = executable


class NoAdminUserError(PreconditionError):
    """Raised when no administrative user exists to own created rows."""

    def __init__(self, roles: list[str] | tuple[str, ...]) -> None:
        """Initialize NoAdminUserError.

        Args:
            roles: Roles that were searched for
        """
        super().__init__(
            "No admin user found. Please create an admin user first.",
            context={"roles": list(roles)},
        )
        self.roles = list(roles)


class SpreadsheetError(PreconditionError):
    """Raised when the input spreadsheet is missing, unreadable, or empty."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SpreadsheetError.

        Args:
            message: Error message
            path: Spreadsheet path
            context: Additional context
        """
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx)
        self.path = path


# ============================================
# External Service Errors
# ============================================


class ExternalAPIError(CatalogIngestError):
    """Raised when an external API call fails.

    Attributes:
        service: Name of the external service
        status_code: HTTP status code (if applicable)
        endpoint: API endpoint that was called
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        response_body: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ExternalAPIError.

        Args:
            service: Name of the external service
            message: Error message
            status_code: HTTP status code (optional)
            endpoint: API endpoint (optional)
            response_body: Response body for debugging (optional)
            context: Additional context
        """
        ctx = context or {}
        ctx["service"] = service
        if status_code is not None:
            ctx["status_code"] = status_code
        if endpoint:
            ctx["endpoint"] = endpoint
        if response_body:
            ctx["response_body"] = response_body[:500]  # Truncate long responses

        self.service = service
        self.status_code = status_code
        self.endpoint = endpoint
        self.response_body = response_body
        super().__init__(message, context=ctx)


class StorageError(ExternalAPIError):
    """Raised when an object store operation fails.

    Attributes:
        key: Destination key of the failed operation
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        status_code: int | None = None,
        endpoint: str | None = None,
        response_body: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize StorageError.

        Args:
            message: Error message
            key: Destination key
            status_code: HTTP status code (optional)
            endpoint: API endpoint (optional)
            response_body: Response body for debugging (optional)
            context: Additional context
        """
        ctx = context or {}
        if key:
            ctx["key"] = key
        self.key = key
        super().__init__(
            service="blob_storage",
            message=message,
            status_code=status_code,
            endpoint=endpoint,
            response_body=response_body,
            context=ctx,
        )


class BlobAlreadyExistsError(StorageError):
    """Raised when an upload targets a key that is already stored."""

    def __init__(self, key: str, status_code: int | None = None) -> None:
        """Initialize BlobAlreadyExistsError.

        Args:
            key: Key that already exists
            status_code: HTTP status code reported by the store
        """
        super().__init__(
            f"Blob already exists: {key}",
            key=key,
            status_code=status_code,
        )


__all__ = [
    "CatalogIngestError",
    "DatabaseError",
    "RecordNotFoundError",
    "RecordAlreadyExistsError",
    "ConfigError",
    "ConfigValidationError",
    "ConfigNotFoundError",
    "PreconditionError",
    "FrameExtractorUnavailableError",
    "NoAdminUserError",
    "SpreadsheetError",
    "ExternalAPIError",
    "StorageError",
    "BlobAlreadyExistsError",
]
