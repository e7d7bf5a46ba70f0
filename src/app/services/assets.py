"""
Asset Service: API 요청 → AssetStore 작업.

규칙:
- 목록은 허용 확장자만 노출 (그 외 파일은 API에서 보이지 않음)
- 표시 이름은 읽기 시점에 매핑 (저장하지 않음)
- 업로드: 파일명 복원 → 크기 제한 → 확장자/경로 검증 → 저장
- rename: 두 이름 모두 필수, 새 이름 경로 탐색 + 확장자 검증
- 자동 재시도 없음 (재시도는 클라이언트 정책)
"""

import logging

from src.core.filenames import (
    decode_upload_filename,
    has_allowed_extension,
    validate_asset_name,
)
from src.core.store import AssetStore
from src.domain.errors import AssetError, ErrorCodes
from src.domain.schemas import Asset, AssetServiceConfig

logger = logging.getLogger(__name__)


class AssetService:
    """
    자산 목록/업로드/이름 변경/삭제 서비스.

    상태 없음: 저장소 디렉터리가 유일한 진실 원천.
    """

    def __init__(self, config: AssetServiceConfig, store: AssetStore | None = None):
        """
        Args:
            config: 서비스 설정 (store_root, max_upload_bytes, extension_allowlist)
            store: 저장소 (None이면 config.store_root로 생성)
        """
        self.config = config
        self.store = store or AssetStore(
            config.store_root, lock_timeout=config.lock_timeout
        )

    def display_name_for(self, name: str) -> str:
        """표시 이름 (매핑 없으면 파일명 그대로)."""
        return self.config.display_names.get(name, name)

    def _to_asset(self, name: str, size_bytes: int) -> Asset:
        return Asset(
            original_name=name,
            size_bytes=size_bytes,
            display_name=self.display_name_for(name),
        )

    def _check_extension(self, filename: str) -> None:
        """저장소에 들어가는 이름은 목록에 보이는 확장자만 (업로드, rename 대상)."""
        if not has_allowed_extension(filename, self.config.extension_allowlist):
            raise AssetError(
                ErrorCodes.UNSUPPORTED_EXTENSION,
                "Unsupported file type.",
                filename=filename,
                allowed=list(self.config.extension_allowlist),
            )

    # =========================================================================
    # List
    # =========================================================================

    def list_assets(self) -> list[Asset]:
        """
        이미지 자산 목록.

        Returns:
            Asset 목록 (저장소 열거 순서)

        Raises:
            AssetError: IO_FAILURE
        """
        return [
            self._to_asset(entry.name, entry.size_bytes)
            for entry in self.store.list()
            if has_allowed_extension(entry.name, self.config.extension_allowlist)
        ]

    # =========================================================================
    # Upload
    # =========================================================================

    def upload_asset(self, raw_bytes: bytes, supplied_filename: str | None) -> Asset:
        """
        업로드된 파일 저장.

        같은 이름이 있으면 덮어씀.

        Args:
            raw_bytes: 파일 내용
            supplied_filename: 클라이언트가 보낸 파일명 (복원 전)

        Returns:
            저장된 Asset

        Raises:
            AssetError: INVALID_INPUT, PAYLOAD_TOO_LARGE, INVALID_NAME,
                UNSUPPORTED_EXTENSION, IO_FAILURE
        """
        if not supplied_filename:
            raise AssetError(ErrorCodes.INVALID_INPUT, "No file uploaded.")

        filename = decode_upload_filename(supplied_filename)

        if len(raw_bytes) > self.config.max_upload_bytes:
            raise AssetError(
                ErrorCodes.PAYLOAD_TOO_LARGE,
                "File too large.",
                filename=filename,
                limit=self.config.max_upload_bytes,
            )

        validate_asset_name(filename)
        self._check_extension(filename)

        self.store.write(filename, raw_bytes)
        logger.info(f"File uploaded: {filename} ({len(raw_bytes)} bytes)")

        return self._to_asset(filename, len(raw_bytes))

    # =========================================================================
    # Rename / Delete
    # =========================================================================

    def rename_asset(self, old_name: str | None, new_name: str | None) -> Asset:
        """
        자산 이름 변경.

        Args:
            old_name: 현재 파일명
            new_name: 새 파일명

        Returns:
            새 이름의 Asset

        Raises:
            AssetError: INVALID_INPUT, INVALID_NAME, UNSUPPORTED_EXTENSION,
                NOT_FOUND, CONFLICT, IO_FAILURE
        """
        if not old_name or not new_name:
            raise AssetError(ErrorCodes.INVALID_INPUT, "Missing filename.")

        validate_asset_name(new_name)
        self._check_extension(new_name)
        new_path = self.store.rename(old_name, new_name)
        logger.info(f"File renamed: {old_name} -> {new_name}")

        return self._to_asset(new_name, self.store.stat(new_path.name))

    def delete_asset(self, name: str) -> None:
        """
        자산 삭제.

        Raises:
            AssetError: INVALID_NAME, NOT_FOUND, IO_FAILURE
        """
        self.store.remove(name)
        logger.info(f"File deleted: {name}")
