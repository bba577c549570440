"""
하루 여행 동선 최적화 CLI
장소 목록 파일을 읽어 방문 순서를 최적화하고 결과 파일을 생성
"""

import sys
import traceback
from pathlib import Path

import click

from .config import load_settings
from .distance_matrix import SOURCE_MAPBOX
from .excel_handler import SUPPORTED_SUFFIXES, ExcelHandler
from .logger_config import log_error_with_context, setup_logger
from .mapbox_api_client import PROFILES
from .route_optimizer import RouteOptimizer


def validate_file_path(file_path: str) -> Path:
    """입력 파일 경로 검증"""
    path = Path(file_path)
    if not path.exists():
        raise click.FileError(file_path, hint="파일을 찾을 수 없습니다")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise click.ClickException(f"지원 형식: {', '.join(SUPPORTED_SUFFIXES)}")
    return path


@click.command()
@click.option('--input', '-i', 'input_file', required=True,
              help='입력 장소 목록 파일 (.xlsx, .csv, .json)')
@click.option('--output', '-o', 'output_file',
              help='출력 파일 경로 (기본: optimized_route.xlsx)')
@click.option('--profile', '-p',
              type=click.Choice(PROFILES),
              default='driving',
              help='이동 수단')
@click.option('--access-token', '-k', 'access_token',
              help='Mapbox 액세스 토큰 (또는 MAPBOX_ACCESS_TOKEN 환경변수 사용)')
@click.option('--max-coordinates', type=int,
              help='매트릭스 API 요청당 최대 좌표 수 (또는 MATRIX_MAX_COORDINATES)')
@click.option('--verbose', '-v', is_flag=True, help='상세 로그 출력')
def main(input_file: str, output_file: str, profile: str, access_token: str,
         max_coordinates: int, verbose: bool):
    """
    하루 여행 동선 최적화 프로그램

    좌표가 있는 장소는 거리 매트릭스와 Nearest Neighbor + 2-opt로 방문 순서를 정하고,
    좌표가 없는 장소는 원래 순서대로 마지막에 붙입니다.
    Mapbox 토큰이 없거나 API 호출이 실패하면 직선(하버사인) 거리로 계산합니다.
    """
    logger = setup_logger(verbose)

    try:
        settings = load_settings().with_overrides(access_token, max_coordinates)
    except ValueError as e:
        click.echo(f"❌ 설정 오류: {str(e)}", err=True)
        sys.exit(1)

    if not settings.has_access_token:
        click.echo("⚠️ Mapbox 액세스 토큰이 없어 직선 거리로 계산합니다.")

    try:
        logger.info("📂 장소 목록 파싱 시작...")
        input_path = validate_file_path(input_file)
        excel_handler = ExcelHandler(logger)
        places = excel_handler.parse_input_file(input_path)

        logger.info(f"🚗 방문 순서 최적화 실행... (프로필: {profile})")
        route_optimizer = RouteOptimizer(settings, logger)
        result = route_optimizer.optimize_places_order(places, profile)

        if result is None:
            click.echo("❌ 좌표가 있는 장소가 2개 이상 필요합니다.", err=True)
            sys.exit(1)

        output_path = output_file or "optimized_route.xlsx"
        excel_handler.save_optimization_result(result, output_path)

        api_client = route_optimizer.matrix_builder.api_client
        if api_client is not None:
            logger.debug(f"API 사용량: {api_client.get_api_usage_info()}")

        summary = route_optimizer.get_optimization_summary(result)
        source_label = "Mapbox" if summary['matrix_source'] == SOURCE_MAPBOX else "직선 거리"

        click.echo(f"🎉 최적화 완료! 결과: {output_path}")
        click.echo("📊 결과 요약:")
        click.echo(f"   총 장소: {summary['total_places']}개 "
                   f"(최적화 {summary['optimized_places']}개, 좌표 없음 {summary['unlocated_places']}개)")
        click.echo(f"   총 거리: {summary['total_distance_km']:.2f}km ({source_label})")
        if summary['total_duration_minutes'] is not None:
            click.echo(f"   총 시간: {summary['total_duration_minutes']:.1f}분")
        for order, place in enumerate(result.optimized_places, start=1):
            click.echo(f"   {order}. {place.name}")

    except click.ClickException:
        raise
    except Exception as e:
        log_error_with_context(logger, e, "경로 최적화", "입력 파일의 컬럼(id, name, latitude, longitude)을 확인하세요")
        click.echo(f"❌ 오류: {str(e)}", err=True)
        if verbose:
            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
