"""같은 사용자의 연속 변경을 직전 이력에 합칠지(aggregate) 새 이력을 만들지 결정합니다."""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from journaling.models.journal import Journal
from journaling.models.user import User
from journaling.utils.helpers import is_blank


class AggregationDecision(str, Enum):
    AGGREGATE = "aggregate"
    CREATE_NEW = "create_new"


def aggregatable(
    predecessor: Optional[Journal],
    notes: Optional[str],
    user: User,
    now: datetime,
    window_minutes: int,
) -> bool:
    if predecessor is None:
        return False
    window = int(window_minutes or 0)
    if window <= 0:
        return False
    if predecessor.created_at is None or predecessor.created_at < now - timedelta(minutes=window):
        return False
    if predecessor.user_id != user.user_id:
        return False
    # 서로 다른 두 메모는 합치지 않는다.
    return is_blank(predecessor.notes) or is_blank(notes)


def decide(
    predecessor: Optional[Journal],
    notes: Optional[str],
    user: User,
    now: datetime,
    window_minutes: int,
) -> AggregationDecision:
    if aggregatable(predecessor, notes, user, now, window_minutes):
        return AggregationDecision.AGGREGATE
    return AggregationDecision.CREATE_NEW
