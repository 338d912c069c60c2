# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    # Without the identity endpoint no principal can ever be built
    if not (settings.IDENTITY_API_URL or "").strip():
        missing.append("IDENTITY_API_URL")
    if not (settings.PROFILE_PATH or "").strip():
        missing.append("PROFILE_PATH")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of missing optional variables (warnings only).
    """
    warnings = []

    if not settings.BACKEND_CORS_ORIGINS:
        warnings.append("FRONTEND_DOMAINS (no CORS origins configured)")

    if settings.PROFILE_TIMEOUT_SECONDS <= 0:
        warnings.append("PROFILE_TIMEOUT_SECONDS (non-positive, requests will not time out)")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError if critical config is missing.
    Logs warnings for optional config.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    for warning in missing_optional:
        logger.warning(f"Optional configuration missing: {warning}")

    logger.info("Configuration validation passed")
