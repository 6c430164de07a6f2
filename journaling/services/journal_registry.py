"""
이력 대상(journable) 타입별 설정 레지스트리입니다.

각 타입은 시작 시점에 JournableDescriptor로 등록한다. 디스크립터는
- 스냅샷 테이블 모델(data_model): PK를 제외한 컬럼이 곧 이력 대상 컬럼이다.
- 최종 수정 시각 속성(timestamp_attribute)
- 현재 상태를 읽을 때 추가로 적용할 조건(source_filter)
을 명시적으로 갖는다. 등록되지 않은 타입을 조회하면 ConfigurationError가 발생한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import Text

from journaling.errors import ConfigurationError
from journaling.models.journal import MeetingJournal, WorkPackageJournal
from journaling.models.meeting import Meeting
from journaling.models.work_package import WorkPackage


@dataclass(frozen=True)
class JournableDescriptor:
    journable_type: str
    model: type
    data_model: type
    route_key: str
    timestamp_attribute: str = "updated_at"
    activity_type: Optional[str] = None
    # 현재 상태 SELECT에 추가되는 WHERE 조건 목록을 돌려준다.
    source_filter: Optional[Callable[[], Sequence[Any]]] = None
    touch_attributes: Tuple[str, ...] = ()

    @property
    def table(self):
        return self.model.__table__

    @property
    def id_column(self):
        return self.model.__mapper__.primary_key[0]

    @property
    def id_attribute(self) -> str:
        return self.model.__mapper__.get_property_by_column(self.id_column).key

    @property
    def data_table(self):
        return self.data_model.__table__

    @property
    def data_id_column(self):
        return self.data_model.__mapper__.primary_key[0]

    @property
    def data_type(self) -> str:
        return self.data_model.__name__

    @property
    def journaled_columns(self) -> List[str]:
        return [column.name for column in self.data_table.columns if not column.primary_key]

    @property
    def text_columns(self) -> List[str]:
        return [
            name for name in self.journaled_columns
            if isinstance(self.table.columns[name].type, Text)
        ]

    @property
    def timestamp_columns(self) -> Tuple[str, ...]:
        return self.touch_attributes or (self.timestamp_attribute,)

    def source_criteria(self) -> List[Any]:
        if self.source_filter is None:
            return []
        return list(self.source_filter())

    def validate(self) -> None:
        columns = self.table.columns
        if not self.timestamp_attribute or self.timestamp_attribute not in columns:
            raise ConfigurationError(
                f"{self.journable_type}: timestamp attribute '{self.timestamp_attribute}' is not a column",
                details={"journable_type": self.journable_type},
            )
        missing = [name for name in self.journaled_columns if name not in columns]
        missing += [name for name in self.touch_attributes if name not in columns]
        if missing:
            raise ConfigurationError(
                f"{self.journable_type}: columns missing on {self.table.name}: {', '.join(missing)}",
                details={"journable_type": self.journable_type, "missing": missing},
            )


class JournableRegistry:
    def __init__(self) -> None:
        self._by_type: Dict[str, JournableDescriptor] = {}
        self._by_route: Dict[str, JournableDescriptor] = {}

    def register(self, descriptor: JournableDescriptor) -> JournableDescriptor:
        descriptor.validate()
        self._by_type[descriptor.journable_type] = descriptor
        self._by_route[descriptor.route_key] = descriptor
        return descriptor

    def unregister(self, journable_type: str) -> None:
        descriptor = self._by_type.pop(journable_type, None)
        if descriptor is not None:
            self._by_route.pop(descriptor.route_key, None)

    def descriptor_for(self, journable_or_type: Any) -> JournableDescriptor:
        if isinstance(journable_or_type, str):
            journable_type = journable_or_type
        else:
            journable_type = type(journable_or_type).__name__
        descriptor = self._by_type.get(journable_type)
        if descriptor is None:
            raise ConfigurationError(
                f"Journable type '{journable_type}' is not registered",
                details={"journable_type": journable_type},
            )
        return descriptor

    def descriptor_for_route(self, route_key: str) -> JournableDescriptor:
        descriptor = self._by_route.get(route_key)
        if descriptor is None:
            raise ConfigurationError(
                f"No journable registered for '{route_key}'",
                details={"route_key": route_key},
            )
        return descriptor

    def journable_types(self) -> List[str]:
        return sorted(self._by_type)


def register_default_journables(target: JournableRegistry) -> None:
    target.register(
        JournableDescriptor(
            journable_type="WorkPackage",
            model=WorkPackage,
            data_model=WorkPackageJournal,
            route_key="work_packages",
            activity_type="work_packages",
        )
    )
    target.register(
        JournableDescriptor(
            journable_type="Meeting",
            model=Meeting,
            data_model=MeetingJournal,
            route_key="meetings",
            activity_type="meetings",
        )
    )


registry = JournableRegistry()
register_default_journables(registry)
