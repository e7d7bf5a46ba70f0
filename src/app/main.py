"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run serverguard  (PORT 환경 변수 우선)
"""

import logging
import os
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.app.routes import assets, pages
from src.app.services.assets import AssetService
from src.core.logging import configure_logging, log_requests
from src.domain.constants import API_BANNER, DEFAULT_HOST, DEFAULT_PORT, RUNTIME_NAME
from src.domain.schemas import AssetServiceConfig

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_ENV_VAR = "SERVERGUARD_CONFIG"

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        # 프로젝트 루트의 default.yaml
        config_path = Path(env_path) if env_path else PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


# =============================================================================
# App Factory
# =============================================================================


def create_app(config: dict[str, Any] | None = None) -> FastAPI:
    """
    FastAPI 앱 생성.

    Args:
        config: 설정 dict (None이면 default.yaml 로드)

    Returns:
        FastAPI 인스턴스
    """
    app_config = config if config is not None else load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        애플리케이션 생명주기 관리.

        시작 시: 로깅 설정, 저장소 디렉터리 준비
        """
        configure_logging(app_config)

        service_config = AssetServiceConfig.from_dict(app_config, base_dir=PROJECT_ROOT)
        service = AssetService(service_config)
        service.store.ensure_ready()
        logger.info(f"Store directory: {service_config.store_root}")

        app.state.config = app_config
        app.state.asset_service = service

        yield

    app = FastAPI(
        title="ServerGuard",
        description="Self-hosted image asset manager",
        version="0.1.0",
        lifespan=lifespan,
    )

    cors_origins = (app_config.get("server", {}) or {}).get("cors_origins", ["*"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    # =========================================================================
    # Root Endpoints
    # =========================================================================

    @app.get("/api", response_class=PlainTextResponse)
    async def api_root() -> str:
        """API 배너."""
        return API_BANNER

    @app.get("/api/health")
    async def health() -> dict[str, Any]:
        """헬스 체크 (대시보드 heartbeat용)."""
        return {
            "status": "ok",
            "runtime": RUNTIME_NAME,
            "timestamp": int(time.time() * 1000),
        }

    # API 라우트
    app.include_router(assets.api_router, prefix="/api", tags=["Assets API"])

    # 페이지 라우트 (catch-all이므로 마지막)
    app.include_router(pages.router, tags=["Pages"])

    return app


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================


def run() -> None:
    """serverguard 콘솔 명령."""
    import uvicorn

    server_config = load_config().get("server", {}) or {}
    port = int(os.getenv("PORT", server_config.get("port", DEFAULT_PORT)))

    uvicorn.run(
        "src.app.main:app",
        host=server_config.get("host", DEFAULT_HOST),
        port=port,
        proxy_headers=True,
    )


if __name__ == "__main__":
    run()
