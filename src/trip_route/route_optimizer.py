"""
경로 최적화 엔진
하루 방문 장소 목록의 방문 순서를 거리 매트릭스 + TSP 근사로 최적화
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .config import Settings
from .coordinate_utils import has_coordinates, to_coordinate
from .distance_matrix import DistanceMatrixBuilder
from .logger_config import ProgressReporter
from .tsp_solver import calculate_route_distance, nearest_neighbor_route, two_opt_route


@dataclass
class OptimizationResult:
    """경로 최적화 결과"""
    optimized_places: List[Any]
    total_distance: float  # 미터
    total_duration: Optional[float] = None  # 초, API 매트릭스 사용 시에만
    matrix_source: str = ""
    route: List[int] = field(default_factory=list)
    leg_distances: List[float] = field(default_factory=list)  # 연속 구간 거리 (미터)

    @property
    def total_distance_km(self) -> float:
        return self.total_distance / 1000


class RouteOptimizer:
    """하루 일정 방문 순서 최적화 클래스"""

    def __init__(self, settings: Optional[Settings] = None, logger: logging.Logger = None,
                 matrix_builder: Optional[DistanceMatrixBuilder] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.matrix_builder = matrix_builder or DistanceMatrixBuilder(settings, self.logger)
        self.progress = ProgressReporter(self.logger)

    def optimize_places_order(self, places: Sequence[Any],
                              profile: str = "driving") -> Optional[OptimizationResult]:
        """
        방문 순서 최적화

        좌표가 있는 장소만 최적화하고, 좌표가 없는 장소는 원래 상대 순서 그대로 뒤에 붙인다.
        입력 목록과 장소 객체는 변경하지 않는다.

        Args:
            places: latitude/longitude 속성을 가진 장소 목록
            profile: 이동 수단 (driving/walking/cycling)

        Returns:
            OptimizationResult, 좌표 있는 장소가 2개 미만이면 None
        """

        # Step 1: 좌표 추출
        places_with_coords = [place for place in places if has_coordinates(place)]
        places_without_coords = [place for place in places if not has_coordinates(place)]
        self.progress.report_extraction(len(places_with_coords), len(places_without_coords))

        if len(places_with_coords) < 2:
            self.logger.info("좌표가 있는 장소가 2개 미만 - 최적화 생략")
            return None

        coordinates = [to_coordinate(place) for place in places_with_coords]

        # Step 2: 거리 매트릭스
        travel_matrix = self.matrix_builder.calculate_travel_matrix(coordinates, profile)
        if travel_matrix is None or travel_matrix.size != len(coordinates):
            self.logger.error("거리 매트릭스를 만들 수 없습니다")
            return None
        self.progress.report_matrix(travel_matrix.size, travel_matrix.source)

        # Step 3: Nearest Neighbor 초기 경로
        distances = travel_matrix.distances
        initial_route = nearest_neighbor_route(distances, 0)
        initial_distance = calculate_route_distance(initial_route, distances)
        self.progress.report_optimization_progress(
            "Nearest Neighbor", f"{initial_distance / 1000:.2f}km")

        # Step 4: 2-opt 개선
        optimized_route = two_opt_route(distances, initial_route)
        total_distance = calculate_route_distance(optimized_route, distances)
        self.progress.report_optimization_progress(
            "2-opt", f"{total_distance / 1000:.2f}km")

        leg_distances = [distances[a][b] for a, b in zip(optimized_route, optimized_route[1:])]

        total_duration = None
        if travel_matrix.durations is not None:
            total_duration = calculate_route_distance(optimized_route, travel_matrix.durations)

        # Step 5: 재조립
        optimized_places = [places_with_coords[index] for index in optimized_route]
        optimized_places.extend(places_without_coords)

        return OptimizationResult(
            optimized_places=optimized_places,
            total_distance=total_distance,
            total_duration=total_duration,
            matrix_source=travel_matrix.source,
            route=optimized_route,
            leg_distances=leg_distances
        )

    def get_optimization_summary(self, result: OptimizationResult) -> dict:
        """최적화 결과 요약 정보"""
        optimized_count = len(result.route)
        summary = {
            'total_places': len(result.optimized_places),
            'optimized_places': optimized_count,
            'unlocated_places': len(result.optimized_places) - optimized_count,
            'total_distance_km': result.total_distance_km,
            'matrix_source': result.matrix_source,
            'total_duration_minutes': None,
        }
        if result.total_duration is not None:
            summary['total_duration_minutes'] = result.total_duration / 60
        return summary


def optimize_places_order(places: Sequence[Any], profile: str = "driving",
                          settings: Optional[Settings] = None,
                          logger: logging.Logger = None) -> Optional[OptimizationResult]:
    """RouteOptimizer 단일 호출 편의 함수"""
    return RouteOptimizer(settings, logger).optimize_places_order(places, profile)
