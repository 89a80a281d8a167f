"""Startup validation of configured keys.

Reports what is missing without raising, so the service can still start and
serve the endpoints that do not need the missing pieces.
"""

import logging
from dataclasses import dataclass, field

from app.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class SettingsReport:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def key_status(settings: Settings) -> dict[str, dict[str, bool | str]]:
    """Which keys are configured, without exposing their values."""
    llm_key = "OPENAI_API_KEY" if settings.llm_provider == "openai" else "ANTHROPIC_API_KEY"
    llm_value = settings.openai_api_key if settings.llm_provider == "openai" else settings.anthropic_api_key

    required = {
        llm_key: llm_value,
        "GOOGLE_CLIENT_ID": settings.google_client_id,
        "GOOGLE_CLIENT_SECRET": settings.google_client_secret,
        "GOOGLE_SHEET_ID": settings.google_sheet_id,
        "GOOGLE_DOC_ID or GOOGLE_DOC_URL": settings.google_doc_id or settings.google_doc_url,
    }
    optional = {
        "DEFAULT_LOGIN_EMAIL": settings.default_login_email,
        "GOOGLE_ACCESS_TOKEN": settings.google_access_token,
        "GOOGLE_REFRESH_TOKEN": settings.google_refresh_token,
    }

    status = {name: {"configured": bool(value), "type": "required"} for name, value in required.items()}
    status.update({name: {"configured": bool(value), "type": "optional"} for name, value in optional.items()})
    return status


def validate_settings(settings: Settings) -> SettingsReport:
    """Check required keys and log the outcome."""
    status = key_status(settings)
    missing = [name for name, s in status.items() if s["type"] == "required" and not s["configured"]]
    unset_optional = [name for name, s in status.items() if s["type"] == "optional" and not s["configured"]]

    report = SettingsReport(is_valid=not missing)
    if missing:
        report.errors.append(f"Missing required environment variables: {', '.join(missing)}")
    report.warnings.extend(f"{name} not set" for name in unset_optional)

    if report.is_valid:
        logger.info("All required API keys are configured")
    else:
        for error in report.errors:
            logger.error(error)
    for warning in report.warnings:
        logger.warning(warning)

    return report
