"""Custom exceptions following RFC 9457 Problem Details for HTTP APIs."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

PROBLEM_TYPE_BASE = "https://aircargo.example.com/problems"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ProblemDetailsException(HTTPException):
    """
    Base exception class following RFC 9457 Problem Details for HTTP APIs.

    https://tools.ietf.org/rfc/rfc9457.txt

    Every domain failure carries an application ``code`` and a ``retryable``
    flag so callers can tell a lost race (retry) from a rule violation
    (do not retry).
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        code: Optional[str] = None,
        retryable: bool = False,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize Problem Details exception.

        Args:
            status_code: HTTP status code
            title: Short, human-readable summary of the problem type
            detail: Human-readable explanation specific to this occurrence
            type_uri: URI reference that identifies the problem type
            instance: URI reference that identifies the specific occurrence
            code: Application-specific error code
            retryable: Whether the caller may retry the same request
            extensions: Additional problem-specific information
            headers: HTTP headers to include in response
        """
        self.status_code = status_code
        self.title = title
        self.message = detail
        self.type_uri = type_uri or f"about:blank#{status_code}"
        self.instance = instance
        self.code = code
        self.retryable = retryable
        self.extensions = extensions or {}

        self.problem_details: Dict[str, Any] = {
            "type": self.type_uri,
            "title": self.title,
            "status": self.status_code,
        }

        if detail:
            self.problem_details["detail"] = detail

        if self.instance:
            self.problem_details["instance"] = self.instance

        if self.code:
            self.problem_details["code"] = self.code
            self.problem_details["retryable"] = self.retryable

        self.problem_details.update(self.extensions)

        super().__init__(
            status_code=status_code,
            detail=self.problem_details,
            headers=headers
        )

    def __str__(self) -> str:
        return self.message or self.title


class ValidationError(ProblemDetailsException):
    """A required field is missing or malformed."""

    def __init__(
        self,
        detail: str = "The request data failed validation",
        violations: Optional[list[Dict[str, str]]] = None,
        status_code: int = 400,
        instance: Optional[str] = None,
    ):
        extensions = {}
        if violations:
            extensions["violations"] = violations

        super().__init__(
            status_code=status_code,
            title="Validation Error",
            detail=detail,
            type_uri=f"{PROBLEM_TYPE_BASE}/validation-error",
            instance=instance,
            code="VALIDATION",
            extensions=extensions,
        )


class InvalidReferenceError(ProblemDetailsException):
    """One or more referenced flights do not exist."""

    def __init__(
        self,
        missing_flight_ids: list[str],
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        if not detail:
            detail = f"Unknown flight id(s): {', '.join(missing_flight_ids)}"

        super().__init__(
            status_code=400,
            title="Invalid Reference",
            detail=detail,
            type_uri=f"{PROBLEM_TYPE_BASE}/invalid-reference",
            instance=instance,
            code="INVALID_REFERENCE",
            extensions={"missing_flight_ids": missing_flight_ids},
        )


class NotFoundError(ProblemDetailsException):
    """Exception for resource not found errors."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        if not detail:
            detail = f"The requested {resource_type}"
            if resource_id:
                detail += f" '{resource_id}'"
            detail += " could not be found"

        extensions = {
            "resource_type": resource_type,
        }
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=detail,
            type_uri=f"{PROBLEM_TYPE_BASE}/resource-not-found",
            instance=instance,
            code="NOT_FOUND",
            extensions=extensions,
        )


class InvalidStateError(ProblemDetailsException):
    """The requested transition is not legal from the booking's current status."""

    def __init__(
        self,
        ref_id: str,
        action: str,
        current_status: str,
        allowed_from: list[str],
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        if not detail:
            detail = (
                f"Cannot {action} booking {ref_id} while it is {current_status}"
            )

        super().__init__(
            status_code=409,
            title="Invalid Booking State",
            detail=detail,
            type_uri=f"{PROBLEM_TYPE_BASE}/invalid-state",
            instance=instance,
            code="INVALID_STATE",
            extensions={
                "ref_id": ref_id,
                "action": action,
                "current_status": current_status,
                "allowed_from": allowed_from,
            },
        )


class ConflictError(ProblemDetailsException):
    """Exception for resource conflict errors."""

    def __init__(
        self,
        detail: str = "The request conflicts with the current state of the resource",
        conflicting_resource: Optional[Dict[str, Any]] = None,
        code: str = "CONFLICT",
        retryable: bool = True,
        instance: Optional[str] = None,
    ):
        extensions = {}
        if conflicting_resource:
            extensions["conflicting_resource"] = conflicting_resource

        super().__init__(
            status_code=409,
            title="Resource Conflict",
            detail=detail,
            type_uri=f"{PROBLEM_TYPE_BASE}/resource-conflict",
            instance=instance,
            code=code,
            retryable=retryable,
            extensions=extensions,
        )


class DuplicateRefIdError(ConflictError):
    """A generated booking reference collided with an existing one."""

    def __init__(self, ref_id: str, attempts: Optional[int] = None):
        detail = f"Booking reference {ref_id} already exists"
        if attempts:
            detail += f" (gave up after {attempts} attempts)"

        super().__init__(
            detail=detail,
            conflicting_resource={"ref_id": ref_id},
            code="DUPLICATE_REF_ID",
        )
        self.ref_id = ref_id


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    """
    Exception handler for Problem Details exceptions.

    Args:
        request: FastAPI request object
        exc: Problem Details exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    content = dict(exc.problem_details)
    content.setdefault("instance", request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=exc.headers,
        media_type="application/problem+json",
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body validation failures as a validation problem."""
    violations = [
        {
            "path": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "invalid value"),
        }
        for error in exc.errors()
    ]
    problem = ValidationError(
        detail="The request body failed validation",
        violations=violations,
        status_code=422,
        instance=request.url.path,
    )
    return await problem_details_handler(request, problem)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler that converts unhandled exceptions to Problem Details format.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception",
        extra={"error_id": error_id, "path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )

    problem_details = {
        "type": f"{PROBLEM_TYPE_BASE}/internal-server-error",
        "title": "Internal Server Error",
        "status": 500,
        "detail": "An unexpected error occurred while processing the request",
        "instance": request.url.path,
        "error_id": error_id,
        "timestamp": _utc_timestamp(),
    }

    return JSONResponse(
        status_code=500,
        content=problem_details,
        media_type="application/problem+json",
    )
