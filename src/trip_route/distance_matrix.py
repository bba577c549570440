"""
거리 매트릭스 생성
Mapbox Matrix API 우선, 실패 또는 좌표 수 초과 시 하버사인 매트릭스로 대체
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .config import Settings
from .coordinate_utils import Coordinate, haversine_distance
from .mapbox_api_client import PROFILES, MapboxMatrixApiClient

Matrix = List[List[float]]

SOURCE_MAPBOX = 'mapbox'
SOURCE_HAVERSINE = 'haversine'


@dataclass
class TravelMatrix:
    """좌표 간 이동 비용 매트릭스"""
    distances: Matrix  # 미터
    durations: Optional[Matrix] = None  # 초, API 응답에서만 제공
    source: str = SOURCE_HAVERSINE

    @property
    def size(self) -> int:
        return len(self.distances)


def calculate_haversine_matrix(coordinates: List[Coordinate]) -> Matrix:
    """
    하버사인 거리 매트릭스 계산

    Args:
        coordinates: (경도, 위도) 좌표 목록

    Returns:
        N x N 거리 매트릭스 (미터, 대각선 0)
    """
    n = len(coordinates)
    matrix = [[0.0] * n for _ in range(n)]

    for i in range(n):
        for j in range(n):
            if i != j:
                matrix[i][j] = haversine_distance(coordinates[i], coordinates[j])

    return matrix


class DistanceMatrixBuilder:
    """거리 매트릭스 생성 클래스"""

    def __init__(self, settings: Optional[Settings] = None, logger: logging.Logger = None,
                 api_client: Optional[MapboxMatrixApiClient] = None):
        self.settings = settings or Settings()
        self.logger = logger or logging.getLogger(__name__)

        if api_client is None and self.settings.has_access_token:
            api_client = MapboxMatrixApiClient(
                self.settings.access_token,
                logger=self.logger,
                base_url=self.settings.matrix_base_url,
                timeout=self.settings.api_timeout
            )
        self.api_client = api_client

        self.MAX_COORDINATES_PER_REQUEST = self.settings.max_coordinates

    def calculate_travel_matrix(self, coordinates: List[Coordinate],
                                profile: str = "driving") -> Optional[TravelMatrix]:
        """
        거리/소요시간 매트릭스 계산

        API 호출은 한 번만 시도하며, 건너뛰거나 실패하면 하버사인 매트릭스를 반환한다.

        Args:
            coordinates: (경도, 위도) 좌표 목록
            profile: 이동 수단 (driving/walking/cycling)

        Returns:
            TravelMatrix, 좌표가 2개 미만이면 None
        """
        if profile not in PROFILES:
            raise ValueError(f"지원하지 않는 프로필입니다: {profile} (가능: {', '.join(PROFILES)})")

        if len(coordinates) < 2:
            return None

        if self.api_client is None:
            self.logger.debug("액세스 토큰 없음 - 하버사인 매트릭스 사용")
        elif len(coordinates) > self.MAX_COORDINATES_PER_REQUEST:
            self.logger.warning(f"좌표 {len(coordinates)}개가 API 한도 "
                                f"{self.MAX_COORDINATES_PER_REQUEST}개를 초과 - 하버사인 매트릭스 사용")
        else:
            travel_matrix = self._request_remote_matrix(coordinates, profile)
            if travel_matrix is not None:
                return travel_matrix

        return TravelMatrix(distances=calculate_haversine_matrix(coordinates),
                            source=SOURCE_HAVERSINE)

    def calculate_distance_matrix(self, coordinates: List[Coordinate],
                                  profile: str = "driving") -> Optional[Matrix]:
        """거리 매트릭스만 반환 (좌표 2개 미만이면 None)"""
        travel_matrix = self.calculate_travel_matrix(coordinates, profile)
        if travel_matrix is None:
            return None
        return travel_matrix.distances

    def _request_remote_matrix(self, coordinates: List[Coordinate],
                               profile: str) -> Optional[TravelMatrix]:
        """API 매트릭스 요청, 실패 시 None"""
        try:
            response_data = self.api_client.get_matrix(coordinates, profile)
        except Exception as e:
            self.logger.warning(f"매트릭스 API 실패, 하버사인으로 대체: {str(e)}")
            return None

        size = len(coordinates)
        distances = [[float(value) for value in row] for row in response_data['distances']]
        durations = MapboxMatrixApiClient.extract_durations(response_data, size)

        self.logger.info(f"매트릭스 API 성공: {size}x{size} ({profile})")
        return TravelMatrix(distances=distances, durations=durations, source=SOURCE_MAPBOX)


def calculate_distance_matrix(coordinates: List[Coordinate], profile: str = "driving",
                              settings: Optional[Settings] = None,
                              logger: logging.Logger = None) -> Optional[Matrix]:
    """DistanceMatrixBuilder 단일 호출 편의 함수"""
    return DistanceMatrixBuilder(settings, logger).calculate_distance_matrix(coordinates, profile)
