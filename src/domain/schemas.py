"""
Data schemas for the asset store.

규칙:
- Asset은 읽기 시점에 파생 (display_name, url은 저장하지 않음)
- 설정은 AssetServiceConfig로 명시적으로 주입 (전역 상태 없음)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.domain.constants import (
    DEFAULT_DISPLAY_NAMES,
    DEFAULT_STORE_DIRNAME,
    IMAGE_EXTENSIONS,
    MAX_UPLOAD_BYTES,
    STORE_LOCK_TIMEOUT_SECONDS,
)

# =============================================================================
# Store Schemas
# =============================================================================

@dataclass(frozen=True)
class StoreEntry:
    """저장소 디렉터리의 파일 한 개 (이름 + 크기)."""
    name: str
    size_bytes: int


@dataclass
class Asset:
    """
    저장된 이미지 파일 한 개의 뷰.

    original_name이 기본 키 (저장소 안에서 유일).
    """
    original_name: str
    size_bytes: int = 0
    display_name: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.original_name

    @property
    def url(self) -> str:
        """파일 바이트를 가리키는 경로."""
        return f"/{self.original_name}"

    def to_dict(self) -> dict[str, Any]:
        """목록 API 응답용."""
        return {
            "name": self.original_name,
            "displayName": self.display_name,
            "url": self.url,
            "size": self.size_bytes,
        }


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class AssetServiceConfig:
    """
    AssetService 생성 시 주입되는 설정.

    default.yaml의 store/display_names 섹션에 대응.
    """
    store_root: Path
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    extension_allowlist: tuple[str, ...] = IMAGE_EXTENSIONS
    display_names: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_DISPLAY_NAMES)
    )
    lock_timeout: float = STORE_LOCK_TIMEOUT_SECONDS

    @classmethod
    def from_dict(
        cls,
        config: dict[str, Any],
        base_dir: Path | None = None,
    ) -> "AssetServiceConfig":
        """
        설정 dict에서 생성.

        Args:
            config: load_config() 결과
            base_dir: 상대 경로 store.root의 기준 디렉터리

        Returns:
            AssetServiceConfig
        """
        store = config.get("store", {}) or {}

        root = Path(store.get("root", DEFAULT_STORE_DIRNAME))
        if not root.is_absolute() and base_dir is not None:
            root = base_dir / root

        extensions = store.get("allowed_extensions", IMAGE_EXTENSIONS)
        display_names = config.get("display_names")
        if display_names is None:
            display_names = dict(DEFAULT_DISPLAY_NAMES)

        return cls(
            store_root=root,
            max_upload_bytes=int(store.get("max_upload_bytes", MAX_UPLOAD_BYTES)),
            extension_allowlist=tuple(
                ext.lower().lstrip(".") for ext in extensions
            ),
            display_names={str(k): str(v) for k, v in display_names.items()},
            lock_timeout=float(
                store.get("lock_timeout", STORE_LOCK_TIMEOUT_SECONDS)
            ),
        )
