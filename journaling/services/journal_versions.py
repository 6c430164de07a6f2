"""journable별 이력 버전 번호를 조회/계산합니다."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from journaling.models.journal import Journal
from journaling.services.journal_aggregation import AggregationDecision


def last_journal(db: Session, journable_type: str, journable_id: int) -> Optional[Journal]:
    # identity map에 남은 이전 상태를 쓰지 않도록 DB 값으로 덮어쓴다.
    return (
        db.query(Journal)
        .filter(
            Journal.journable_type == journable_type,
            Journal.journable_id == journable_id,
        )
        .order_by(Journal.version.desc())
        .populate_existing()
        .first()
    )


def max_version(db: Session, journable_type: str, journable_id: int) -> int:
    current_max = db.execute(
        select(func.max(Journal.version)).where(
            Journal.journable_type == journable_type,
            Journal.journable_id == journable_id,
        )
    ).scalar()
    return current_max or 0


def next_version(
    db: Session,
    journable_type: str,
    journable_id: int,
    predecessor: Optional[Journal],
    decision: AggregationDecision,
) -> int:
    if decision == AggregationDecision.AGGREGATE and predecessor is not None:
        return predecessor.version
    return max_version(db, journable_type, journable_id) + 1
