"""
Assets Routes: 자산 REST API.

- GET /api/assets → 목록 [{name, displayName, url, size}]
- POST /api/upload → multipart 필드 "file"
- PUT /api/rename → JSON {oldName, newName}
- DELETE /api/delete/{filename}

에러 응답: {"detail": {"code", "message"}} (상태 코드는 AssetError.status_code)
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from starlette.datastructures import UploadFile

from src.app.services.assets import AssetService
from src.domain.constants import MULTIPART_OVERHEAD_BYTES
from src.domain.errors import AssetError, ErrorCodes

logger = logging.getLogger(__name__)

api_router = APIRouter()


def get_asset_service(request: Request) -> AssetService:
    """lifespan에서 생성된 AssetService."""
    service: AssetService = request.app.state.asset_service
    return service


def _to_http_exception(e: AssetError) -> HTTPException:
    if e.status_code >= 500:
        logger.error(f"Asset operation failed: {e}")
    return HTTPException(
        status_code=e.status_code,
        detail={"code": e.code, "message": e.message},
    )


# =============================================================================
# API Routes
# =============================================================================

@api_router.get("/assets")
async def list_assets(request: Request) -> list[dict[str, Any]]:
    """자산 목록."""
    service = get_asset_service(request)
    try:
        return [asset.to_dict() for asset in service.list_assets()]
    except AssetError as e:
        raise _to_http_exception(e) from e


def _declared_length(request: Request) -> int | None:
    """Content-Length 헤더 값 (없거나 숫자가 아니면 None)."""
    value = request.headers.get("content-length", "")
    return int(value) if value.isdigit() else None


@api_router.post("/upload")
async def upload_asset(request: Request) -> dict[str, Any]:
    """
    파일 업로드 (multipart 필드 "file").

    - Content-Length가 제한 + multipart 여유분을 넘으면 본문 파싱 전에 거부
    - "file"이 파일 파트가 아니면 (일반 폼 값, 누락) INVALID_INPUT
    - 제한 크기 + 1 바이트까지만 읽음 → 초과 여부는 서비스가 판정
    """
    service = get_asset_service(request)
    limit = service.config.max_upload_bytes

    declared = _declared_length(request)
    if declared is not None and declared > limit + MULTIPART_OVERHEAD_BYTES:
        raise _to_http_exception(
            AssetError(
                ErrorCodes.PAYLOAD_TOO_LARGE,
                "File too large.",
                content_length=declared,
                limit=limit,
            )
        )

    async with request.form() as form:
        file = form.get("file")
        if not isinstance(file, UploadFile) or not file.filename:
            raise _to_http_exception(
                AssetError(ErrorCodes.INVALID_INPUT, "No file uploaded.")
            )

        filename = file.filename
        raw_bytes = await file.read(limit + 1)

    try:
        asset = service.upload_asset(raw_bytes, filename)
    except AssetError as e:
        raise _to_http_exception(e) from e

    return {
        "message": "File uploaded successfully",
        "filename": asset.original_name,
        "url": asset.url,
    }


@api_router.put("/rename")
async def rename_asset(request: Request) -> dict[str, Any]:
    """파일명 변경. body: {"oldName": ..., "newName": ...}"""
    service = get_asset_service(request)

    try:
        payload = await request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise _to_http_exception(
            AssetError(ErrorCodes.INVALID_INPUT, "Missing filename.")
        )

    old_name = payload.get("oldName")
    new_name = payload.get("newName")
    if not isinstance(old_name, str) or not isinstance(new_name, str):
        old_name = new_name = None

    try:
        asset = service.rename_asset(old_name, new_name)
    except AssetError as e:
        raise _to_http_exception(e) from e

    return {
        "message": "File renamed successfully.",
        "newName": asset.original_name,
        "url": asset.url,
    }


@api_router.delete("/delete/{filename}")
async def delete_asset(request: Request, filename: str) -> dict[str, Any]:
    """파일 삭제."""
    service = get_asset_service(request)
    try:
        service.delete_asset(filename)
    except AssetError as e:
        raise _to_http_exception(e) from e

    return {"message": "File deleted successfully."}
