"""
장소 목록 입출력 핸들러
Excel/CSV/JSON 장소 목록 파싱 및 최적화 결과 저장
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from .coordinate_utils import CoordinateValidator, has_coordinates
from .itinerary import Place
from .route_optimizer import OptimizationResult

SUPPORTED_SUFFIXES = ('.xlsx', '.csv', '.json')

# 결과 파일에서 새로 계산하는 컬럼
OUTPUT_COLUMNS = ('visit_order', 'leg_distance_m', 'cumulative_distance_m')


class ExcelHandler:
    """장소 목록 입출력 처리 클래스"""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self.coordinate_validator = CoordinateValidator()

    def parse_input_file(self, file_path: Path) -> List[Place]:
        """
        입력 파일 파싱

        Args:
            file_path: .xlsx/.csv/.json 파일 경로

        Returns:
            장소 목록 (원본 순서)
        """
        file_path = Path(file_path)
        suffix = file_path.suffix.lower()

        if suffix not in SUPPORTED_SUFFIXES:
            raise ValueError(f"지원하지 않는 파일 형식입니다: {suffix} (가능: {', '.join(SUPPORTED_SUFFIXES)})")

        if suffix == '.json':
            records = self._read_json_records(file_path)
        else:
            df = self._read_table(file_path, suffix)
            self.logger.info(f"파일 로드 완료: {len(df)}행")
            self.logger.debug(f"감지된 컬럼: {list(df.columns)}")
            # 빈 셀은 None으로
            df = df.astype(object).where(pd.notna(df), None)
            records = df.to_dict(orient='records')

        places = []
        for idx, record in enumerate(records):
            place = Place.from_dict(record, default_id=f"PLACE_{idx + 1}")
            if has_coordinates(place) and not self.coordinate_validator.is_valid_coordinate(
                    place.longitude, place.latitude):
                self.logger.warning(f"행 {idx + 1}: WGS84 범위를 벗어난 좌표 "
                                    f"({place.longitude}, {place.latitude}) - {place.name}")
            places.append(place)

        if not places:
            raise ValueError("장소 데이터가 없습니다. 입력 파일을 확인해주세요.")

        self.logger.info(f"총 {len(places)}개 장소 파싱 완료")
        return places

    def _read_table(self, file_path: Path, suffix: str) -> pd.DataFrame:
        if suffix == '.csv':
            return pd.read_csv(file_path)
        return pd.read_excel(file_path, engine='openpyxl')

    def _read_json_records(self, file_path: Path) -> List[Dict[str, Any]]:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        # {"places": [...]} 또는 [...] 형식
        if isinstance(data, dict):
            data = data.get('places', [])
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise ValueError("JSON 입력은 장소 객체 배열이어야 합니다")
        return data

    def build_output_rows(self, result: OptimizationResult) -> List[Dict[str, Any]]:
        """결과 행 생성 (방문 순서, 장소 필드, 구간/누적 거리)"""
        rows = []
        cumulative_distance = 0.0
        optimized_count = len(result.route)

        for order, place in enumerate(result.optimized_places, start=1):
            row = {'visit_order': order}
            # 결과 파일을 다시 읽은 경우 이전 순서/거리 컬럼은 버림
            row.update((key, value) for key, value in place.to_dict().items()
                       if key not in OUTPUT_COLUMNS)

            # 좌표 없는 장소는 구간 거리 없음
            leg_distance = None
            if order <= optimized_count:
                if order > 1:
                    leg_distance = result.leg_distances[order - 2]
                    cumulative_distance += leg_distance
                row['cumulative_distance_m'] = round(cumulative_distance, 1)
            else:
                row['cumulative_distance_m'] = None

            row['leg_distance_m'] = round(leg_distance, 1) if leg_distance is not None else None
            rows.append(row)

        return rows

    def save_optimization_result(self, result: OptimizationResult, output_path: str):
        """
        최적화 결과 저장 (.xlsx: 경로/요약 시트, .csv: 표, .json: 객체 배열)
        """
        output_path = Path(output_path)
        suffix = output_path.suffix.lower()
        rows = self.build_output_rows(result)

        try:
            if suffix == '.json':
                with open(output_path, 'w', encoding='utf-8') as f:
                    json.dump({
                        'places': rows,
                        'total_distance_m': result.total_distance,
                        'total_duration_s': result.total_duration,
                        'matrix_source': result.matrix_source,
                    }, f, ensure_ascii=False, indent=2, default=str)
            elif suffix == '.csv':
                pd.DataFrame(rows).to_csv(output_path, index=False)
            elif suffix == '.xlsx':
                with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
                    pd.DataFrame(rows).to_excel(writer, sheet_name='optimized_route', index=False)
                    pd.DataFrame([self._summary_row(result)]).to_excel(
                        writer, sheet_name='summary', index=False)
            else:
                raise ValueError(f"지원하지 않는 출력 형식입니다: {suffix}")

            self.logger.info(f"결과 파일 생성 완료: {output_path}")

        except Exception as e:
            self.logger.error(f"출력 파일 생성 실패: {str(e)}")
            raise

    @staticmethod
    def _summary_row(result: OptimizationResult) -> Dict[str, Any]:
        return {
            'total_places': len(result.optimized_places),
            'optimized_places': len(result.route),
            'total_distance_km': round(result.total_distance_km, 3),
            'total_duration_min': round(result.total_duration / 60, 1) if result.total_duration is not None else None,
            'matrix_source': result.matrix_source,
        }
