from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .db import get_db
from .envelope import api_response
from .models import User
from .schemas import FieldCreate, FieldUpdate, FieldOut, FieldStatus
from .security import get_current_user
from .services import fields

router = APIRouter(prefix="/api/v1/fields", tags=["fields"])


@router.post("/create-field")
def create_field(payload: FieldCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = fields.create_field(db, user.id, payload)
    return api_response(FieldOut.model_validate(rec), "Field created successfully", 201)


@router.get("/get-fields")
def list_fields(
    status: Optional[FieldStatus] = None,
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rows = fields.list_fields(db, user.id, status=status, limit=limit)
    return api_response({"fields": [FieldOut.model_validate(r) for r in rows]}, "Fields retrieved successfully")


@router.get("/summary")
def field_summary(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return api_response(fields.field_summary(db, user.id), "Field summary retrieved successfully")


@router.get("/get-field-by-id/{field_id}")
def get_field(field_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = fields.get_field(db, user.id, field_id)
    return api_response(FieldOut.model_validate(rec), "Field retrieved successfully")


@router.put("/update-field/{field_id}")
def update_field(field_id: str, payload: FieldUpdate,
                 db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = fields.update_field(db, user.id, field_id, payload)
    return api_response(FieldOut.model_validate(rec), "Field updated successfully")


@router.delete("/delete-field/{field_id}")
def delete_field(field_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    fields.delete_field(db, user.id, field_id)
    return api_response({}, "Field deleted successfully")
