"""
여행 일정 모델
장소/일자/여행 데이터와 일자별 방문 순서 최적화
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .route_optimizer import RouteOptimizer


def _clean(value: Any) -> Any:
    """빈 셀(NaN, 빈 문자열)을 None으로"""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _to_id(value: Any) -> Optional[str]:
    """빈 셀이 섞인 정수 id 컬럼은 float로 읽히므로 '7.0' 대신 '7'"""
    value = _clean(value)
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _to_float(value: Any) -> Optional[float]:
    value = _clean(value)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Place:
    """방문 장소"""
    id: str
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    time_slot: str = 'morning'
    category: str = 'other'
    estimated_cost: float = 0.0
    specific_time: Optional[str] = None  # "HH:mm"
    extra: Dict[str, Any] = field(default_factory=dict)

    FIELDS = ('id', 'name', 'latitude', 'longitude', 'time_slot',
              'category', 'estimated_cost', 'specific_time')

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_id: str = '') -> 'Place':
        """
        dict(엑셀 행, JSON 객체)에서 장소 생성

        변환할 수 없는 좌표는 None으로 처리하고, 알 수 없는 키는 extra에 보관한다.
        """
        place_id = _to_id(data.get('id'))
        estimated_cost = _to_float(data.get('estimated_cost'))
        specific_time = _clean(data.get('specific_time'))
        return cls(
            id=place_id if place_id is not None else default_id,
            name=str(_clean(data.get('name')) or ''),
            latitude=_to_float(data.get('latitude')),
            longitude=_to_float(data.get('longitude')),
            time_slot=str(_clean(data.get('time_slot')) or 'morning'),
            category=str(_clean(data.get('category')) or 'other'),
            estimated_cost=estimated_cost if estimated_cost is not None else 0.0,
            specific_time=str(specific_time) if specific_time is not None else None,
            extra={key: _clean(value) for key, value in data.items() if key not in cls.FIELDS}
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in self.FIELDS}
        data.update(self.extra)
        return data


@dataclass
class Day:
    """여행 일자"""
    id: str
    date: str  # ISO 날짜
    places: List[Place] = field(default_factory=list)

    def total_cost(self) -> float:
        return sum(place.estimated_cost for place in self.places)


@dataclass
class Trip:
    """여행 일정"""
    name: str = 'New Trip'
    start_date: str = ''
    end_date: str = ''
    people_count: int = 1
    total_budget: float = 0.0
    days: List[Day] = field(default_factory=list)

    def get_day(self, day_id: str) -> Optional[Day]:
        return next((day for day in self.days if day.id == day_id), None)

    def total_cost(self) -> float:
        return sum(day.total_cost() for day in self.days)

    def cost_per_person(self) -> float:
        if self.people_count <= 0:
            return 0.0
        return self.total_cost() / self.people_count


def optimize_day(trip: Trip, day_id: str, profile: str = "driving",
                 optimizer: Optional[RouteOptimizer] = None) -> Tuple[Trip, Optional[float]]:
    """
    일자의 방문 순서를 최적화한 새 Trip 반환

    Args:
        trip: 원본 여행 일정 (변경하지 않음)
        day_id: 최적화할 일자 ID
        profile: 이동 수단 (driving/walking/cycling)
        optimizer: 사용할 RouteOptimizer (기본: 환경설정 없이 생성)

    Returns:
        (새 Trip, 총 거리 미터). 일자가 없거나 최적화할 수 없으면 (원본 Trip, None)
    """
    day = trip.get_day(day_id)
    if day is None or len(day.places) < 2:
        return trip, None

    optimizer = optimizer or RouteOptimizer()
    result = optimizer.optimize_places_order(day.places, profile)
    if result is None:
        return trip, None

    days = [
        replace(trip_day, places=list(result.optimized_places)) if trip_day.id == day_id else trip_day
        for trip_day in trip.days
    ]
    return replace(trip, days=days), result.total_distance
