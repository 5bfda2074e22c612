"""Partner helpers -- pure input validation."""

from __future__ import annotations

from citrus_kernel.domain.validation import FieldError, raise_if_errors


def validate_partner_fields(name: object, email: object) -> tuple[str, str]:
    """Return stripped ``(name, email)`` or raise ValidationError."""
    errors: list[FieldError] = []
    if not isinstance(name, str) or not name.strip():
        errors.append(FieldError("name", "name must be a non-empty string"))
    if not isinstance(email, str) or "@" not in email.strip():
        errors.append(FieldError("email", "email must be an email address"))
    raise_if_errors("partner", errors)
    return name.strip(), email.strip().lower()
