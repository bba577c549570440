"""
좌표 검증 및 거리 계산 유틸리티
WGS84 좌표 처리, 하버사인 거리
"""

import math
from numbers import Real
from typing import Any, Tuple

# (경도, 위도)
Coordinate = Tuple[float, float]

# 지구 반지름 (미터)
EARTH_RADIUS_METERS = 6371000


def haversine_distance(coord1: Coordinate, coord2: Coordinate) -> float:
    """
    두 좌표 간 대원 거리 계산 (하버사인 공식)

    Args:
        coord1: 첫 번째 좌표 (경도, 위도)
        coord2: 두 번째 좌표 (경도, 위도)

    Returns:
        거리 (미터)
    """
    lon1, lat1 = coord1
    lon2, lat2 = coord2

    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    # 부동소수점 오차로 a가 1을 약간 넘는 경우 보정
    c = 2 * math.asin(math.sqrt(min(1.0, a)))

    return EARTH_RADIUS_METERS * c


def is_coordinate_value(value: Any) -> bool:
    """유한한 실수 좌표값 여부 (bool, NaN, inf 제외)"""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def has_coordinates(place: Any) -> bool:
    """위도와 경도가 모두 있는 장소인지 확인 (하나만 있으면 좌표 없음으로 간주)"""
    return (is_coordinate_value(getattr(place, 'latitude', None)) and
            is_coordinate_value(getattr(place, 'longitude', None)))


def to_coordinate(place: Any) -> Coordinate:
    """장소를 (경도, 위도) 좌표로 변환"""
    return (float(place.longitude), float(place.latitude))


class CoordinateValidator:
    """좌표 유효성 검증 클래스"""

    # WGS84 좌표계 범위
    MIN_LONGITUDE = -180.0
    MAX_LONGITUDE = 180.0
    MIN_LATITUDE = -90.0
    MAX_LATITUDE = 90.0

    def is_valid_coordinate(self, longitude: float, latitude: float) -> bool:
        """
        좌표 유효성 검증

        Args:
            longitude: 경도
            latitude: 위도

        Returns:
            유효성 여부
        """
        if not (is_coordinate_value(longitude) and is_coordinate_value(latitude)):
            return False
        if not (self.MIN_LONGITUDE <= longitude <= self.MAX_LONGITUDE):
            return False
        if not (self.MIN_LATITUDE <= latitude <= self.MAX_LATITUDE):
            return False
        return True

    def format_coordinate(self, longitude: float, latitude: float) -> str:
        """Mapbox 요청 형식 'lng,lat' 문자열"""
        return f"{longitude},{latitude}"
