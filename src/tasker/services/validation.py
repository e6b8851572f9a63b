"""Field rules applied before anything is written."""

from collections.abc import Iterable

from ..errors import ValidationError
from ..models import Direction

COLUMN_NAME_MAX_LENGTH = 255
TASK_NAME_MAX_LENGTH = 500
TASK_DESCRIPTION_MAX_LENGTH = 5000
PROJECT_NAME_MAX_LENGTH = 500
PROJECT_DESCRIPTION_MAX_LENGTH = 1000
COMMENT_TEXT_MAX_LENGTH = 5000


def require_text(value: str, max_length: int, field: str = "name") -> str:
    """Check a mandatory text field is present and short enough."""
    if not value:
        raise ValidationError(field, "required", f"{field} is required")
    return limit_length(value, max_length, field)


def limit_length(value: str, max_length: int, field: str) -> str:
    """Check an optional text field is short enough."""
    if len(value) > max_length:
        raise ValidationError(
            field, "too_long", f"{field} is too long ({len(value)} > {max_length} characters)"
        )
    return value


def coerce_direction(value: Direction | str, allowed: Iterable[Direction]) -> Direction:
    """Turn ``value`` into a Direction accepted by the operation."""
    allowed = tuple(allowed)
    try:
        direction = Direction(value)
    except ValueError:
        direction = None
    if direction not in allowed:
        names = ", ".join(d.value for d in allowed)
        raise ValidationError("direction", "direction", f"direction must be one of: {names}")
    return direction
