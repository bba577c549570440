"""
로깅 설정 모듈
경로 최적화 단계별 로그 및 매트릭스 API 요청/응답 기록
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER_NAME = 'trip_route'


def setup_logger(verbose: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    로거 설정 및 초기화

    Args:
        verbose: DEBUG 레벨 및 파일 로그 활성화 여부
        log_dir: 파일 로그 디렉토리 (기본: ./logs)

    Returns:
        패키지 루트 로거
    """

    log_level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # 기존 핸들러 제거
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if verbose:
        log_dir = Path(log_dir) if log_dir else Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)

        log_filename = f"trip_route_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        log_filepath = log_dir / log_filename

        file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.info(f"상세 로그 파일: {log_filepath}")

    # 중복 로그 방지
    logger.propagate = False

    return logger


class ProgressReporter:
    """최적화 진행 상황 리포팅 클래스"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def report_extraction(self, with_coords: int, without_coords: int):
        self.logger.info(f"좌표 추출: 좌표 있음 {with_coords}개, 좌표 없음 {without_coords}개")

    def report_matrix(self, size: int, source: str):
        self.logger.info(f"거리 매트릭스: {size}x{size} ({source})")

    def report_optimization_progress(self, stage: str, details: str = ""):
        """최적화 단계별 진행상황 리포트"""
        message = f"최적화 단계: {stage}"
        if details:
            message += f" - {details}"
        self.logger.info(message)


def log_matrix_request(logger: logging.Logger, profile: str, coordinate_count: int):
    """매트릭스 API 요청 로깅"""
    logger.debug(f"매트릭스 API 요청: 좌표 {coordinate_count}개 [프로필: {profile}]")


def log_matrix_response(logger: logging.Logger, response_data: Dict[str, Any]):
    """매트릭스 API 응답 로깅"""
    code = response_data.get('code', 'Unknown')
    if code == 'Ok':
        distances = response_data.get('distances') or []
        has_durations = bool(response_data.get('durations'))
        logger.debug(f"매트릭스 API 응답 성공: {len(distances)}행, "
                     f"소요시간 포함={has_durations}")
    else:
        message = response_data.get('message', '')
        logger.warning(f"매트릭스 API 응답 실패: 코드 {code} {message}".rstrip())


def log_error_with_context(logger: logging.Logger, error: Exception,
                           context: str, user_action: str = ""):
    """컨텍스트가 있는 오류 로깅"""
    logger.error(f"오류 발생 [{context}]: {str(error)}")
    if user_action:
        logger.info(f"해결 방법: {user_action}")

    # 디버그 모드에서 스택 트레이스 로깅
    if logger.isEnabledFor(logging.DEBUG):
        logger.exception("상세 오류 정보:")
