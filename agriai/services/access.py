from sqlalchemy.orm import Session

from ..envelope import ApiError
from ..models import Field


def get_owned_field(db: Session, owner_id: int, field_id: str) -> Field:
    """Look up a field by its public id, only among the caller's fields."""
    field = (
        db.query(Field)
        .filter(Field.field_id == field_id, Field.owner_id == owner_id)
        .first()
    )
    if not field:
        raise ApiError(404, "Field not found or access denied")
    return field
