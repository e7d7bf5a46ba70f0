"""
Page Routes: 대시보드 + 저장 파일 정적 서빙.

- GET / → 대시보드 (Jinja2)
- GET /{filename} → 저장소 파일 바이트
  - 이미지 확장자인데 없으면 404
  - 그 외 경로는 대시보드로 fallback (SPA fallback 대상은 하나)

main.py에서 가장 마지막에 include (catch-all).
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from src.app.routes.assets import get_asset_service
from src.core.filenames import has_allowed_extension
from src.domain.constants import DEFAULT_PING_INTERVAL_MS
from src.domain.errors import AssetError

_templates_dir = Path(__file__).parent.parent / "templates"
jinja_templates = Jinja2Templates(directory=_templates_dir)

router = APIRouter()


def _render_dashboard(request: Request) -> HTMLResponse:
    ui_config = request.app.state.config.get("ui", {}) or {}
    return jinja_templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "ping_interval_ms": int(
                ui_config.get("ping_interval_ms", DEFAULT_PING_INTERVAL_MS)
            ),
        },
    )


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(request: Request) -> HTMLResponse:
    """자산 관리 화면."""
    return _render_dashboard(request)


@router.get("/{filename:path}")
async def serve_asset_or_page(request: Request, filename: str) -> Response:
    """저장 파일 서빙, 없으면 대시보드 fallback."""
    if filename == "api" or filename.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not Found")

    service = get_asset_service(request)
    try:
        return FileResponse(service.store.open_path(filename))
    except AssetError:
        pass  # 저장소에 없음 → 아래에서 404 또는 fallback

    if has_allowed_extension(filename, service.config.extension_allowlist):
        raise HTTPException(status_code=404, detail="Not Found")

    return _render_dashboard(request)
