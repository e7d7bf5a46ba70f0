"""
Core layer: 파일시스템 저장소와 파일명 정책.

이 모듈만 파일시스템을 직접 건드림 → 가장 보수적으로 관리

역할:
- AssetStore (목록, 쓰기, 이름 변경, 삭제)
- 파일명 검증 (경로 탐색 방지), 업로드 파일명 복원
- 로깅 설정
"""

from .filenames import (
    decode_upload_filename,
    has_allowed_extension,
    validate_asset_name,
)
from .logging import configure_logging, log_requests
from .store import AssetStore

__all__ = [
    # store
    "AssetStore",
    # filenames
    "validate_asset_name",
    "has_allowed_extension",
    "decode_upload_filename",
    # logging
    "configure_logging",
    "log_requests",
]
