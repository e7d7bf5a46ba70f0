"""
Asset Store: 파일명으로 주소 지정되는 디렉터리 저장소.

규칙:
- 모든 변경 작업은 파일명 검증 후에만 파일시스템 접근
- 디렉터리 없음 → 빈 목록, 디렉터리 읽기 실패 → IO_FAILURE (빈 목록으로 숨기지 않음)
- 파일별 stat 실패 → size 0 (목록 전체를 실패시키지 않음)
- 쓰기: temp → rename (중간 상태 없음) + fsync 경고
- rename/remove: 저장소 락 안에서 존재/충돌 확인 후 실행
"""

import logging
import os
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from src.core.filenames import validate_asset_name
from src.domain.constants import (
    STORE_LOCK_FILENAME,
    STORE_LOCK_TIMEOUT_SECONDS,
    STORE_LOCKS_DIRNAME,
)
from src.domain.errors import AssetError, ErrorCodes, io_failure
from src.domain.schemas import StoreEntry

logger = logging.getLogger(__name__)


def _fsync_dir(dir_path: Path) -> None:
    """
    디렉토리 fsync (가능한 환경에서).

    rename 후 디렉토리 엔트리 내구성용. 실패 시 경고만.
    """
    try:
        dir_fd = os.open(str(dir_path), os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
    except (OSError, AttributeError) as e:
        # O_DIRECTORY 미지원 (Windows) 등
        logger.warning(f"Directory fsync failed for {dir_path}: {e}")


class AssetStore:
    """
    파일시스템 디렉터리 기반 자산 저장소.

    구조:
    <root>/
    ├── <asset files>    # 업로드된 이미지 (파일명 = 키)
    └── .locks/          # 저장소 락 (목록에 노출 안 됨)
    """

    def __init__(
        self,
        root: Path,
        lock_timeout: float = STORE_LOCK_TIMEOUT_SECONDS,
    ):
        """
        Args:
            root: 저장소 디렉터리
            lock_timeout: 락 대기 시간 (초)
        """
        self.root = root
        self.lock_timeout = lock_timeout
        self._locks_dir = root / STORE_LOCKS_DIRNAME

    @contextmanager
    def _store_lock(self) -> Generator[None, None, None]:
        """
        저장소 락 획득.

        같은 저장소를 쓰는 프로세스 간 check-then-act 보호.

        Raises:
            AssetError: LOCK_TIMEOUT
        """
        try:
            self._locks_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise io_failure("lock", e, root=str(self.root)) from e
        lock = FileLock(self._locks_dir / STORE_LOCK_FILENAME, timeout=self.lock_timeout)

        try:
            lock.acquire()
        except Timeout as e:
            raise AssetError(
                ErrorCodes.LOCK_TIMEOUT,
                "Failed to acquire store lock.",
                timeout=self.lock_timeout,
            ) from e

        try:
            yield
        finally:
            lock.release()

    # =========================================================================
    # Setup
    # =========================================================================

    def ensure_ready(self) -> Path:
        """
        저장소 디렉터리 생성 (이미 있으면 무시).

        동시 생성으로 인한 "이미 존재"는 성공으로 취급.

        Returns:
            저장소 디렉터리 경로

        Raises:
            AssetError: IO_FAILURE
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise io_failure("create", e, root=str(self.root)) from e
        return self.root

    def path_for(self, name: str) -> Path:
        """검증된 파일명의 전체 경로."""
        validate_asset_name(name)
        return self.root / name

    # =========================================================================
    # Read
    # =========================================================================

    def list(self) -> list[StoreEntry]:
        """
        저장소 파일 목록.

        디렉터리 순서 그대로 반환 (정렬 보장 없음).

        Returns:
            StoreEntry 목록 (디렉터리 없으면 빈 목록)

        Raises:
            AssetError: IO_FAILURE (디렉터리는 있으나 읽기 실패)
        """
        if not self.root.exists():
            return []

        try:
            with os.scandir(self.root) as it:
                names = [entry.name for entry in it if entry.is_file()]
        except OSError as e:
            logger.error(f"Error reading store directory {self.root}: {e}")
            raise io_failure("list", e, root=str(self.root)) from e

        return [StoreEntry(name=name, size_bytes=self.stat(name)) for name in names]

    def stat(self, name: str) -> int:
        """
        파일 크기 (best-effort).

        Returns:
            바이트 수 (stat 실패 시 0)
        """
        try:
            return (self.root / name).stat().st_size
        except OSError as e:
            logger.warning(f"stat failed for {name}: {e} (size reported as 0)")
            return 0

    def open_path(self, name: str) -> Path:
        """
        정적 서빙용 파일 경로.

        Raises:
            AssetError: INVALID_NAME, NOT_FOUND
        """
        path = self.path_for(name)
        if not path.is_file():
            raise AssetError(ErrorCodes.NOT_FOUND, "File not found.", name=name)
        return path

    # =========================================================================
    # Write
    # =========================================================================

    def write(self, name: str, data: bytes) -> Path:
        """
        파일 저장 (생성 또는 덮어쓰기).

        동작:
        - 파일명 검증 후에만 파일시스템 접근
        - temp → rename (원자적), 실패 시 temp 정리

        Args:
            name: 파일명
            data: 파일 내용

        Returns:
            저장된 파일 경로

        Raises:
            AssetError: INVALID_NAME, IO_FAILURE
        """
        target = self.path_for(name)
        self.ensure_ready()

        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self.root,
                prefix=".upload-",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                f.write(data)
                f.flush()
                try:
                    os.fsync(f.fileno())
                except OSError as e:
                    logger.warning(f"File fsync failed for {target}: {e}")

            with self._store_lock():
                os.replace(temp_path, target)
            temp_path = None
            _fsync_dir(self.root)

        except OSError as e:
            raise io_failure("write", e, name=name) from e
        finally:
            if temp_path is not None and temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning(f"Failed to remove temp file {temp_path}")

        return target

    def rename(self, old_name: str, new_name: str) -> Path:
        """
        파일명 변경 (내용 보존).

        Args:
            old_name: 현재 파일명
            new_name: 새 파일명

        Returns:
            새 파일 경로

        Raises:
            AssetError: INVALID_NAME, NOT_FOUND, CONFLICT, IO_FAILURE
        """
        new_path = self.path_for(new_name)
        old_path = self.path_for(old_name)

        with self._store_lock():
            if not old_path.is_file():
                raise AssetError(
                    ErrorCodes.NOT_FOUND, "File not found.", name=old_name
                )
            if new_path.exists():
                raise AssetError(
                    ErrorCodes.CONFLICT, "File already exists.", name=new_name
                )

            try:
                os.rename(old_path, new_path)
            except FileNotFoundError as e:
                raise AssetError(
                    ErrorCodes.NOT_FOUND, "File not found.", name=old_name
                ) from e
            except OSError as e:
                logger.error(f"Rename error {old_name} -> {new_name}: {e}")
                raise io_failure("rename", e, name=old_name, new_name=new_name) from e

        return new_path

    def remove(self, name: str) -> None:
        """
        파일 삭제.

        Raises:
            AssetError: INVALID_NAME, NOT_FOUND, IO_FAILURE
        """
        path = self.path_for(name)

        with self._store_lock():
            if not path.is_file():
                raise AssetError(ErrorCodes.NOT_FOUND, "File not found.", name=name)

            try:
                path.unlink()
            except FileNotFoundError as e:
                raise AssetError(
                    ErrorCodes.NOT_FOUND, "File not found.", name=name
                ) from e
            except OSError as e:
                logger.error(f"Delete error {name}: {e}")
                raise io_failure("delete", e, name=name) from e
