# core/config_validator.py

from typing import List

from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Problems that make the API unusable: no Supabase project to talk to.
    Returns one message per problem.
    """
    problems = []

    for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY"):
        if not getattr(settings, name):
            problems.append(name)

    if settings.SUPABASE_URL and not settings.SUPABASE_URL.startswith(("https://", "http://")):
        problems.append("SUPABASE_URL (must be an http(s) URL)")

    return problems


def validate_optional_config() -> List[str]:
    """
    Settings that disable a feature or look wrong, but still let the API boot.
    """
    warnings = []

    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        warnings.append("SUPABASE_SERVICE_ROLE_KEY missing (user management disabled)")

    if settings.ROLE_LOOKUP_TIMEOUT_SECONDS <= 0:
        warnings.append("ROLE_LOOKUP_TIMEOUT_SECONDS <= 0 (every role lookup will time out)")

    if settings.RECEIPT_DELAY_SECONDS < 0:
        warnings.append("RECEIPT_DELAY_SECONDS < 0 (receipts flip immediately)")

    return warnings


def validate_config_on_startup():
    """
    Raises RuntimeError if required config is missing; logs the rest.
    """
    missing_required = validate_required_config()

    if missing_required:
        error_msg = f"Missing or invalid environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    for warning in validate_optional_config():
        logger.warning(f"Configuration: {warning}")

    logger.info("Configuration validation passed")
