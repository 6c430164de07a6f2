"""CustomField Service 도메인 서비스 레이어입니다. 사용자 정의 필드와 그 값을 관리합니다."""

from typing import Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from journaling.models.custom_field import CustomField, CustomValue
from journaling.schemas.custom_field import CustomFieldCreate


def list_custom_fields(db: Session) -> List[CustomField]:
    return db.query(CustomField).order_by(CustomField.custom_field_id.asc()).all()


def create_custom_field(db: Session, data: CustomFieldCreate) -> CustomField:
    field = CustomField(**data.model_dump())
    db.add(field)
    db.commit()
    db.refresh(field)
    return field


def apply_custom_values(
    db: Session,
    *,
    customized_type: str,
    customized_id: int,
    values: Dict[int, Optional[str]],
) -> None:
    """필드별 값을 반영한다. commit은 호출자가 한다."""
    if not values:
        return
    field_ids = {int(field_id) for field_id in values}
    known = {
        int(row[0])
        for row in db.query(CustomField.custom_field_id)
        .filter(CustomField.custom_field_id.in_(field_ids))
        .all()
    }
    if field_ids - known:
        raise HTTPException(status_code=400, detail="존재하지 않는 사용자 정의 필드입니다.")

    for field_id, value in values.items():
        rows = (
            db.query(CustomValue)
            .filter(
                CustomValue.customized_type == customized_type,
                CustomValue.customized_id == customized_id,
                CustomValue.custom_field_id == int(field_id),
            )
            .order_by(CustomValue.custom_value_id.asc())
            .all()
        )
        if value is None or value == "":
            for row in rows:
                db.delete(row)
            continue
        if rows:
            rows[0].value = value
            for extra in rows[1:]:
                db.delete(extra)
        else:
            db.add(CustomValue(
                customized_type=customized_type,
                customized_id=customized_id,
                custom_field_id=int(field_id),
                value=value,
            ))
