import uuid

from marshmallow import ValidationError


def normalize_uuid(raw: str) -> str:
    """Return the canonical string form of a UUID, or raise ValidationError."""
    if raw is None:
        raise ValidationError("ID is required.")
    try:
        return str(uuid.UUID(str(raw).strip()))
    except ValueError:
        raise ValidationError("Invalid ID.")
