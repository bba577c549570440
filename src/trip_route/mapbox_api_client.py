"""
Mapbox Matrix API 클라이언트
좌표 목록에 대한 거리/소요시간 매트릭스 요청
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_API_TIMEOUT, DEFAULT_MATRIX_BASE_URL
from .coordinate_utils import Coordinate, CoordinateValidator
from .logger_config import log_matrix_request, log_matrix_response

PROFILES = ('driving', 'walking', 'cycling')


class MapboxMatrixApiClient:
    """Mapbox Directions Matrix API 클라이언트"""

    def __init__(self, access_token: str, logger: logging.Logger = None,
                 base_url: str = DEFAULT_MATRIX_BASE_URL,
                 timeout: float = DEFAULT_API_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.access_token = access_token
        if not self.access_token:
            raise ValueError("액세스 토큰이 필요합니다. --access-token 옵션 또는 MAPBOX_ACCESS_TOKEN 환경변수를 설정하세요.")

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)
        self.coordinate_validator = CoordinateValidator()
        self.request_count = 0

    def build_url(self, coordinates: List[Coordinate], profile: str) -> str:
        """프로필과 'lng,lat;lng,lat' 좌표 경로가 포함된 요청 URL"""
        coordinates_string = ";".join(
            self.coordinate_validator.format_coordinate(lon, lat) for lon, lat in coordinates
        )
        return f"{self.base_url}/{profile}/{coordinates_string}"

    def get_matrix(self, coordinates: List[Coordinate], profile: str = "driving") -> Dict[str, Any]:
        """
        거리/소요시간 매트릭스 API 호출

        Args:
            coordinates: (경도, 위도) 좌표 목록
            profile: 이동 수단 (driving/walking/cycling)

        Returns:
            검증된 API 응답 데이터 ('distances', 선택적으로 'durations' 포함)
        """
        if profile not in PROFILES:
            raise ValueError(f"지원하지 않는 프로필입니다: {profile}")

        params = {
            'access_token': self.access_token,
            'annotations': 'distance,duration',
        }

        log_matrix_request(self.logger, profile, len(coordinates))

        try:
            response = self.session.get(
                self.build_url(coordinates, profile),
                params=params,
                timeout=self.timeout
            )
            self.request_count += 1
        except requests.RequestException as e:
            raise RuntimeError(f"네트워크 오류: {str(e)}")

        if response.status_code != 200:
            self._handle_http_error(response)

        try:
            response_data = response.json()
        except ValueError as e:
            raise ValueError(f"잘못된 API 응답: JSON 파싱 실패 ({str(e)})")

        if not isinstance(response_data, dict):
            raise ValueError("잘못된 API 응답: 객체가 아님")

        log_matrix_response(self.logger, response_data)
        self._validate_api_response(response_data, len(coordinates))

        return response_data

    def _handle_http_error(self, response: requests.Response):
        """HTTP 오류 처리"""
        status_code = response.status_code

        try:
            error_msg = response.json().get('message', '알 수 없는 오류')
        except (ValueError, AttributeError):
            error_msg = response.text or '응답 없음'

        if status_code == 401:
            raise ValueError(f"인증 실패: 액세스 토큰을 확인하세요. {error_msg}")
        elif status_code == 403:
            raise ValueError(f"권한 없음: {error_msg}")
        elif status_code == 422:
            raise ValueError(f"잘못된 요청: {error_msg}")
        elif status_code == 429:
            raise ValueError(f"요청 한도 초과: {error_msg}")
        elif status_code >= 500:
            raise RuntimeError(f"서버 오류: {error_msg}")
        else:
            raise RuntimeError(f"HTTP {status_code}: {error_msg}")

    def _validate_api_response(self, response_data: Dict[str, Any], size: int):
        """API 응답 유효성 검증 (code == 'Ok', size x size 숫자 매트릭스)"""
        code = response_data.get('code')
        if code != 'Ok':
            message = response_data.get('message', '알 수 없는 오류')
            raise ValueError(f"매트릭스 계산 실패 (코드: {code}): {message}")

        if not self._is_square_matrix(response_data.get('distances'), size):
            raise ValueError("잘못된 API 응답: distances 매트릭스 형식 오류")

    @staticmethod
    def _is_square_matrix(matrix: Any, size: int) -> bool:
        if not isinstance(matrix, list) or len(matrix) != size:
            return False
        for row in matrix:
            if not isinstance(row, list) or len(row) != size:
                return False
            for value in row:
                # 경로가 없는 구간은 null로 내려온다
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    return False
        return True

    @classmethod
    def extract_durations(cls, response_data: Dict[str, Any], size: int) -> Optional[List[List[float]]]:
        """응답의 durations 매트릭스 (형식이 맞지 않으면 None)"""
        durations = response_data.get('durations')
        if cls._is_square_matrix(durations, size):
            return [[float(value) for value in row] for row in durations]
        return None

    def get_api_usage_info(self) -> Dict[str, Any]:
        """API 사용량 정보 반환"""
        return {
            'total_requests': self.request_count,
            'api_endpoint': self.base_url
        }
