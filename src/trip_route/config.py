"""
환경 설정 로더
.env 파일 및 환경변수에서 Mapbox 매트릭스 API 설정을 읽는다
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MATRIX_BASE_URL = "https://api.mapbox.com/directions-matrix/v1/mapbox"

# Mapbox Matrix API 요청당 최대 좌표 수
DEFAULT_MAX_COORDINATES = 25
DEFAULT_API_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """경로 최적화 설정"""
    access_token: str = ""
    max_coordinates: int = DEFAULT_MAX_COORDINATES
    api_timeout: float = DEFAULT_API_TIMEOUT
    matrix_base_url: str = DEFAULT_MATRIX_BASE_URL

    @property
    def has_access_token(self) -> bool:
        return bool(self.access_token)

    def with_overrides(self, access_token: Optional[str] = None,
                       max_coordinates: Optional[int] = None) -> 'Settings':
        """CLI 옵션으로 일부 값을 덮어쓴 새 설정 반환"""
        changes = {}
        if access_token:
            changes['access_token'] = access_token
        if max_coordinates is not None:
            changes['max_coordinates'] = _validate_max_coordinates(max_coordinates, '--max-coordinates')
        return replace(self, **changes)


def _validate_max_coordinates(value: int, name: str) -> int:
    if value < 2:
        raise ValueError(f"{name} 값은 2 이상이어야 합니다: {value}")
    return value


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} 환경변수는 정수여야 합니다: {raw!r}")


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} 환경변수는 숫자여야 합니다: {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} 환경변수는 0보다 커야 합니다: {raw!r}")
    return value


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    환경변수에서 설정 로드

    Args:
        env_file: 읽을 .env 파일 경로 (기본: 현재 디렉토리 탐색)

    Returns:
        Settings 인스턴스
    """
    load_dotenv(env_file)

    max_coordinates = _validate_max_coordinates(
        _read_int('MATRIX_MAX_COORDINATES', DEFAULT_MAX_COORDINATES),
        'MATRIX_MAX_COORDINATES'
    )

    return Settings(
        access_token=os.getenv('MAPBOX_ACCESS_TOKEN', '').strip(),
        max_coordinates=max_coordinates,
        api_timeout=_read_float('MATRIX_API_TIMEOUT', DEFAULT_API_TIMEOUT),
        matrix_base_url=os.getenv('MAPBOX_MATRIX_BASE_URL', DEFAULT_MATRIX_BASE_URL).rstrip('/'),
    )
