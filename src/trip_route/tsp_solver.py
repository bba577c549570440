"""
방문 순서 최적화 (TSP 근사)
Nearest Neighbor 초기해 + 2-opt 개선
"""

from typing import List, Optional, Sequence

Matrix = Sequence[Sequence[float]]


def nearest_neighbor_route(distance_matrix: Matrix, start_index: int = 0) -> List[int]:
    """
    Nearest Neighbor 알고리즘으로 초기 방문 순서 생성

    Args:
        distance_matrix: N x N 거리 매트릭스
        start_index: 출발 인덱스

    Returns:
        인덱스 방문 순서
    """
    n = len(distance_matrix)
    if n <= 1:
        return [0]

    visited = {start_index}
    route = [start_index]
    current = start_index

    while len(visited) < n:
        nearest: Optional[int] = None
        min_distance = float('inf')

        # 동일 거리면 먼저 나온 인덱스 유지
        for i in range(n):
            if i not in visited and distance_matrix[current][i] < min_distance:
                min_distance = distance_matrix[current][i]
                nearest = i

        if nearest is None:
            break

        route.append(nearest)
        visited.add(nearest)
        current = nearest

    return route


def two_opt_route(distance_matrix: Matrix, initial_route: Sequence[int],
                  wrap_last_edge: bool = True) -> List[int]:
    """
    2-opt 교환으로 방문 순서 개선

    (i, i+1), (j, j+1) 간선을 (i, j), (i+1, j+1)로 바꿨을 때 비용이 줄면
    route[i+1..j] 구간을 뒤집는다. 개선이 없을 때까지 전체 탐색을 반복한다.

    wrap_last_edge가 True이면 j가 마지막 인덱스일 때 j+1을 출발지(0)로 감아
    닫힌 경로처럼 평가한다. False이면 마지막 지점 이후 간선이 없는 열린 경로로 평가한다.

    Args:
        distance_matrix: N x N 거리 매트릭스 (비대칭 가능)
        initial_route: 초기 방문 순서
        wrap_last_edge: 마지막 간선의 순환 평가 여부

    Returns:
        개선된 방문 순서
    """
    n = len(distance_matrix)
    route = list(initial_route)
    if n <= 2:
        return route

    d = distance_matrix
    improved = True

    while improved:
        improved = False

        for i in range(n - 1):
            for j in range(i + 2, n):
                if wrap_last_edge or j + 1 < n:
                    after_j = route[(j + 1) % n]
                    current_distance = d[route[i]][route[i + 1]] + d[route[j]][after_j]
                    new_distance = d[route[i]][route[j]] + d[route[i + 1]][after_j]
                else:
                    current_distance = d[route[i]][route[i + 1]]
                    new_distance = d[route[i]][route[j]]

                if new_distance < current_distance:
                    route[i + 1:j + 1] = reversed(route[i + 1:j + 1])
                    improved = True

    return route


def calculate_route_distance(route: Sequence[int], distance_matrix: Matrix) -> float:
    """
    경로 총 거리 (열린 경로, 출발지 복귀 없음)

    Args:
        route: 인덱스 방문 순서
        distance_matrix: 거리 매트릭스

    Returns:
        총 거리
    """
    total_distance = 0.0
    for i in range(len(route) - 1):
        total_distance += distance_matrix[route[i]][route[i + 1]]
    return total_distance
