"""Structured logging configuration for report audit and application events."""

import logging
import sys
from typing import Any

from app.core.config_file import get_settings

settings = get_settings()

# Create logger for audit events (report changes, reverts)
audit_logger = logging.getLogger("app.audit")
audit_logger.setLevel(logging.INFO)

# Create logger for application events
app_logger = logging.getLogger("app")
app_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

# Create console handler with structured format
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.INFO)

# Create formatter
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
console_handler.setFormatter(formatter)

# Add handler to loggers if not already added
if not audit_logger.handlers:
    audit_logger.addHandler(console_handler)
if not app_logger.handlers:
    app_logger.addHandler(console_handler)


def mask_email(email: str) -> str:
    """
    Mask email address for logging (show only first 3 chars and domain).

    Args:
        email: Email address to mask.

    Returns:
        Masked email string (e.g., "tes***@example.com").
    """
    if not email or "@" not in email:
        return "***"

    local_part, domain = email.split("@", 1)

    if len(local_part) <= 3:
        masked_local = "*" * len(local_part)
    else:
        masked_local = local_part[:3] + "***"

    return f"{masked_local}@{domain}"


def _masked_patch(patch: dict[str, Any]) -> dict[str, Any]:
    """Return a shallow view of a patch with planning recipients masked."""
    planning = patch.get("planning")
    if not isinstance(planning, dict):
        return patch
    option = planning.get("option")
    if not isinstance(option, dict) or not isinstance(option.get("recipients"), list):
        return patch

    masked_option = {
        **option,
        "recipients": [mask_email(str(r)) for r in option["recipients"]],
    }
    return {**patch, "planning": {**planning, "option": masked_option}}


def log_report_updated(
    report_id: str,
    platform: str,
    user_id: int | str | None,
    patch: dict[str, Any] | None = None,
    changes: dict[str, Any] | None = None,
) -> None:
    """
    Log a committed report configuration change.

    Args:
        report_id: Report UUID.
        platform: Tenant platform.
        user_id: User who performed the update.
        patch: Incoming update payload (recipients are masked).
        changes: Detected property changes (optional).
    """
    message = f"Report updated - report_id={report_id}, platform={platform}, user_id={user_id}"
    if patch:
        message += f", payload={_masked_patch(patch)}"
    if changes:
        message += f", changes={changes}"

    audit_logger.info(message)


def log_report_update_reverted(report_id: str, platform: str, reason: str) -> None:
    """
    Log the revert of a report after a failure following the in-memory commit.

    Args:
        report_id: Report UUID.
        platform: Tenant platform.
        reason: Error that triggered the revert.
    """
    audit_logger.warning(
        f"Report update reverted - report_id={report_id}, platform={platform}, reason={reason}"
    )


def log_query_rejected(code: int, message: str) -> None:
    """
    Log a query builder validation failure.

    Args:
        code: Numeric query builder error code.
        message: Error message returned to the caller.
    """
    app_logger.info(f"Query builder input rejected - code={code}, message={message}")
