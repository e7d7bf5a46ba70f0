"""
Pytest fixtures for the asset store tests.

테스트 구성:
- 저장소는 항상 tmp_path 아래 (프로젝트 public/ 건드리지 않음)
- API 테스트는 create_app(config)로 격리된 앱 사용
"""

from collections.abc import Generator
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from src.app.main import create_app
from src.app.services.assets import AssetService
from src.core.store import AssetStore
from src.domain.schemas import AssetServiceConfig

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """테스트용 저장소 디렉터리 (아직 생성 안 됨)."""
    return tmp_path / "public"


# =============================================================================
# Store / Service Fixtures
# =============================================================================

@pytest.fixture
def store(store_root: Path) -> AssetStore:
    """준비된 AssetStore."""
    store = AssetStore(store_root, lock_timeout=1.0)
    store.ensure_ready()
    return store


@pytest.fixture
def service_config(store_root: Path) -> AssetServiceConfig:
    """테스트용 서비스 설정 (업로드 제한 1 KiB)."""
    return AssetServiceConfig(
        store_root=store_root,
        max_upload_bytes=1024,
        display_names={"avatar.png": "用户头像"},
        lock_timeout=1.0,
    )


@pytest.fixture
def service(service_config: AssetServiceConfig, store: AssetStore) -> AssetService:
    """AssetService 인스턴스."""
    return AssetService(service_config, store=store)


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def app_config(store_root: Path) -> dict:
    """테스트용 앱 설정."""
    return {
        "store": {
            "root": str(store_root),
            "max_upload_bytes": 2048,
            "lock_timeout": 1,
        },
        "display_names": {"avatar.png": "用户头像"},
        "ui": {"ping_interval_ms": 1000},
        "logging": {"level": "WARNING"},
    }


@pytest.fixture
def client(app_config: dict) -> Generator[TestClient, None, None]:
    """FastAPI TestClient (lifespan 실행)."""
    with TestClient(create_app(app_config)) as client:
        yield client
