"""Field validation for user payloads."""

from collections.abc import Callable

import email_validator
from email_validator import EmailNotValidError, validate_email

from userapi.models.user import UserPayload

NAME_MAX_LENGTH = 50

# Reserved names such as "localhost" are valid domains for addresses on private networks
email_validator.SPECIAL_USE_DOMAIN_NAMES[:] = []

# A rule returns an error message, or None when the value passes
Rule = Callable[[str | None], str | None]


def _required(message: str) -> Rule:
    def check(value: str | None) -> str | None:
        if value is None or not value.strip():
            return message
        return None

    return check


def _max_length(limit: int, message: str) -> Rule:
    def check(value: str | None) -> str | None:
        if value is not None and len(value) > limit:
            return message
        return None

    return check


def _email_address(message: str) -> Rule:
    def check(value: str | None) -> str | None:
        try:
            # Single-label domains like "mailserver1" are accepted, as on an intranet
            validate_email(value or "", check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError:
            return message
        return None

    return check


USER_RULES: dict[str, list[Rule]] = {
    "name": [
        _required("Name is required."),
        _max_length(NAME_MAX_LENGTH, "Name cannot exceed 50 characters."),
    ],
    "email": [
        _required("Email is required."),
        _email_address("Invalid email format."),
    ],
}


def validate_user(payload: UserPayload) -> list[str]:
    """Validate a user payload against USER_RULES.

    Rules for a field run in order and stop at the first failure, so a
    missing name reports only that it is required.

    Args:
        payload: Candidate user record

    Returns:
        Ordered list of violation messages, empty when the payload is valid
    """
    errors: list[str] = []
    for field, rules in USER_RULES.items():
        value = getattr(payload, field)
        for rule in rules:
            message = rule(value)
            if message is not None:
                errors.append(message)
                break
    return errors
