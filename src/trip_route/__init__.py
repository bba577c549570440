"""하루 여행 동선 최적화"""

from .config import Settings, load_settings
from .coordinate_utils import haversine_distance
from .distance_matrix import (DistanceMatrixBuilder, TravelMatrix,
                              calculate_distance_matrix, calculate_haversine_matrix)
from .itinerary import Day, Place, Trip, optimize_day
from .route_optimizer import OptimizationResult, RouteOptimizer, optimize_places_order
from .tsp_solver import calculate_route_distance, nearest_neighbor_route, two_opt_route

__version__ = '1.0.0'
