# core/errors.py

from typing import Any, Optional

from fastapi import HTTPException


class ProfileFetchError(Exception):
    """
    The identity endpoint could not produce a profile
    (network failure, timeout, 5xx, unreadable body).
    """

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def extract_upstream_error(body: Any, fallback: str = "Unknown identity service error") -> str:
    """
    Pull a readable message out of an upstream error body.
    Handles:
      • plain text bodies
      • {"message": "..."} / {"message": ["...", ...]} (NestJS style)
      • {"error": "..."}
    """
    if body is None:
        return fallback

    if isinstance(body, str):
        return body.strip() or fallback

    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, list) and message:
            return str(message[0])
        if message:
            return str(message)
        if body.get("error"):
            return str(body["error"])

    return fallback


def handle_upstream_error(error: Exception, operation: str = "Identity service call", status_code: int = 502) -> HTTPException:
    """
    Convert an identity-service failure into an HTTPException.
    Returns (doesn't raise) so caller can customize or re-raise.
    """
    from core.logging_config import logger

    detail = error.detail if isinstance(error, ProfileFetchError) else str(error)
    logger.error(f"{operation}: {detail}")

    upstream_status = getattr(error, "status_code", None)
    if upstream_status == 408:
        return HTTPException(status_code=504, detail=f"{operation}: timed out")

    return HTTPException(status_code=status_code, detail=f"{operation} failed")
