# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Client errors carry a suggestion on how to fix the request; server errors
# carry only a generic message (the cause is logged, never returned).
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class TheoriaException(Exception):
    """
    Base exception for the Theoria API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "THEORIA_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Not Found Exceptions
# =============================================================================

class ProjectNotFoundError(TheoriaException):
    """Raised when a project ID doesn't exist."""

    def __init__(self, project_id: str):
        super().__init__(
            message=f"Project not found: {project_id}",
            code="PROJECT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the project id is correct and the project hasn't been deleted",
            details={"id": project_id}
        )


class TeamMemberNotFoundError(TheoriaException):
    """Raised when a team member ID doesn't exist."""

    def __init__(self, member_id: str):
        super().__init__(
            message=f"Team member not found: {member_id}",
            code="TEAM_MEMBER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the team member id is correct and the member hasn't been deleted",
            details={"id": member_id}
        )


# =============================================================================
# Authorization Exceptions
# =============================================================================

class UnauthorizedError(TheoriaException):
    """
    Raised for every rejected admin request.

    Missing sessions and non-admin sessions get the same response.
    """

    def __init__(self):
        super().__init__(
            message="Unauthorized",
            code="UNAUTHORIZED",
            status_code=401,
        )


# =============================================================================
# Reorder Exceptions
# =============================================================================

class InvalidPermutationError(TheoriaException):
    """Raised when a reorder payload is not a list of distinct ids."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Invalid reorder payload: {reason}",
            code="INVALID_PERMUTATION",
            status_code=400,
            suggestion="Send every id of the collection exactly once, in the new display order",
            details=details,
        )


class ReorderConflictError(TheoriaException):
    """Raised when a reorder payload doesn't match the current collection."""

    def __init__(self, missing: list[str], unknown: list[str]):
        super().__init__(
            message="Reorder ids do not match the current collection",
            code="REORDER_CONFLICT",
            status_code=409,
            suggestion="The collection changed since it was loaded. Reload and try again",
            details={"missing": missing, "unknown": unknown}
        )


# =============================================================================
# Validation Exceptions
# =============================================================================

class UnknownCaseStudySlugError(TheoriaException):
    """Raised when a project references a case study that isn't registered."""

    def __init__(self, slug: str, known: list[str]):
        super().__init__(
            message=f"Unknown case study slug: {slug}",
            code="UNKNOWN_CASE_STUDY_SLUG",
            status_code=400,
            suggestion=f"Use one of: {', '.join(known)}, or leave the slug empty",
            details={"slug": slug, "known_slugs": known}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(TheoriaException):
    """Raised when uploaded file is not an image."""

    def __init__(self, filename: str, content_type: str | None):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion="Only image files (image/*) can be uploaded",
            details={"filename": filename, "content_type": content_type}
        )


class FileTooLargeError(TheoriaException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class UnknownBucketError(TheoriaException):
    """Raised when a storage bucket outside the configured ones is named."""

    def __init__(self, bucket: str, allowed: list[str]):
        super().__init__(
            message=f"Unknown storage bucket: {bucket}",
            code="UNKNOWN_BUCKET",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"bucket": bucket, "allowed": allowed}
        )


class EmptyFileError(TheoriaException):
    """Raised when uploaded file has no content."""

    def __init__(self, filename: str):
        super().__init__(
            message=f"File is empty: {filename}",
            code="EMPTY_FILE",
            status_code=400,
            suggestion="Choose a non-empty image file",
            details={"filename": filename}
        )


class InvalidImageContentError(TheoriaException):
    """Raised when inline image content is not valid base64."""

    def __init__(self, filename: str):
        super().__init__(
            message=f"Image content is not valid base64: {filename}",
            code="INVALID_IMAGE_CONTENT",
            status_code=400,
            suggestion="Send raw bytes, a base64 string or a data URL (data:image/png;base64,...)",
            details={"filename": filename}
        )


# =============================================================================
# Server Exceptions
# =============================================================================

class PersistenceError(TheoriaException):
    """Raised when a database operation fails. The cause is only logged."""

    def __init__(self, action: str, entity: str):
        super().__init__(
            message=f"Failed to {action} {entity}",
            code="PERSISTENCE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
        )


class StorageUploadError(TheoriaException):
    """Raised when file upload to storage fails. The cause is only logged."""

    def __init__(self):
        super().__init__(
            message="Failed to upload file",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
        )


class StorageDeleteError(TheoriaException):
    """Raised when a file can't be removed from storage. The cause is only logged."""

    def __init__(self):
        super().__init__(
            message="Failed to delete file",
            code="STORAGE_DELETE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def theoria_exception_handler(
    request: Request,
    exc: TheoriaException
) -> JSONResponse:
    """
    Convert TheoriaException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Reports one entry per invalid field, e.g.
    {"field": "body.startYear", "message": "Input should be a valid integer"}
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
