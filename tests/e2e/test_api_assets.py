"""
test_api_assets.py - Assets API E2E 테스트

엔드포인트:
- GET /api
- GET /api/health
- GET /api/assets
- POST /api/upload
- PUT /api/rename
- DELETE /api/delete/{filename}
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.domain.constants import MULTIPART_OVERHEAD_BYTES

# =============================================================================
# Helpers
# =============================================================================


def _upload(client: TestClient, filename: str, content: bytes):
    return client.post(
        "/api/upload",
        files={"file": (filename, content, "image/png")},
    )


def _rename(client: TestClient, old_name: str, new_name: str):
    return client.put("/api/rename", json={"oldName": old_name, "newName": new_name})


# =============================================================================
# Root Endpoints
# =============================================================================


class TestRootEndpoints:
    """배너 + 헬스 체크."""

    def test_api_banner(self, client):
        response = client.get("/api")

        assert response.status_code == 200
        assert response.text == "ServerGuard API is running"

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["runtime"] == "python"
        assert isinstance(data["timestamp"], int)

    def test_store_created_on_startup(self, client, store_root: Path):
        assert store_root.is_dir()


# =============================================================================
# Scenario
# =============================================================================


class TestAssetLifecycle:
    """업로드 → 이름 변경 → 잘못된 이름 변경 → 삭제 두 번."""

    def test_full_scenario(self, client):
        # upload avatar.png (1024 bytes)
        response = _upload(client, "avatar.png", b"x" * 1024)
        assert response.status_code == 200
        assert response.json() == {
            "message": "File uploaded successfully",
            "filename": "avatar.png",
            "url": "/avatar.png",
        }

        response = client.get("/api/assets")
        assert response.status_code == 200
        assert response.json() == [
            {"name": "avatar.png", "displayName": "用户头像", "url": "/avatar.png", "size": 1024}
        ]

        # rename avatar.png → user.png
        response = _rename(client, "avatar.png", "user.png")
        assert response.status_code == 200
        assert response.json() == {
            "message": "File renamed successfully.",
            "newName": "user.png",
            "url": "/user.png",
        }
        assert [a["name"] for a in client.get("/api/assets").json()] == ["user.png"]

        # rename user.png → ../escape.png
        response = _rename(client, "user.png", "../escape.png")
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_NAME"
        assert [a["name"] for a in client.get("/api/assets").json()] == ["user.png"]

        # delete twice
        response = client.delete("/api/delete/user.png")
        assert response.status_code == 200
        assert response.json() == {"message": "File deleted successfully."}

        response = client.delete("/api/delete/user.png")
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NOT_FOUND"

        assert client.get("/api/assets").json() == []


# =============================================================================
# GET /api/assets
# =============================================================================


class TestListAssets:
    """목록 API."""

    def test_hides_non_images(self, client, store_root: Path):
        (store_root / "readme.txt").write_bytes(b"text")
        (store_root / "logo.webp").write_bytes(b"webp")

        data = client.get("/api/assets").json()

        assert [a["name"] for a in data] == ["logo.webp"]
        assert data[0]["displayName"] == "logo.webp"

    def test_enumeration_error_is_500(self, client, store_root: Path):
        with patch("src.core.store.os.scandir", side_effect=PermissionError(13, "denied")):
            response = client.get("/api/assets")

        assert response.status_code == 500
        assert response.json()["detail"]["code"] == "IO_FAILURE"


# =============================================================================
# POST /api/upload
# =============================================================================


class TestUpload:
    """업로드 API."""

    def test_no_file(self, client):
        response = client.post("/api/upload")

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"

    def test_form_value_instead_of_file(self, client):
        """urlencoded 값 "file" → 파일 없음."""
        response = client.post("/api/upload", data={"file": "not-a-file"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"

    def test_multipart_field_without_filename(self, client):
        """filename 없는 multipart 파트 → 파일 없음."""
        response = client.post("/api/upload", files={"file": (None, "not-a-file")})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"
        assert client.get("/api/assets").json() == []

    def test_over_limit(self, client):
        response = _upload(client, "big.png", b"x" * 2049)

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "PAYLOAD_TOO_LARGE"
        assert client.get("/api/assets").json() == []

    def test_oversized_body_rejected_before_parsing(self, client):
        """Content-Length가 제한 + 여유분 초과 → 폼 파싱 없이 거부."""
        content = b"x" * (2048 + MULTIPART_OVERHEAD_BYTES + 1)

        with patch("starlette.requests.Request.form") as form:
            response = _upload(client, "huge.png", content)

        form.assert_not_called()
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "PAYLOAD_TOO_LARGE"
        assert client.get("/api/assets").json() == []

    def test_unsupported_extension(self, client):
        response = _upload(client, "script.js", b"alert(1)")

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "UNSUPPORTED_EXTENSION"

    def test_unicode_filename(self, client):
        response = _upload(client, "头像.png", b"img")

        assert response.status_code == 200
        assert response.json()["filename"] == "头像.png"
        assert [a["name"] for a in client.get("/api/assets").json()] == ["头像.png"]


# =============================================================================
# PUT /api/rename
# =============================================================================


class TestRename:
    """이름 변경 API."""

    def test_missing_names(self, client):
        response = client.put("/api/rename", json={"oldName": "a.png"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"

    def test_non_json_body(self, client):
        response = client.put(
            "/api/rename",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    def test_not_found(self, client):
        response = _rename(client, "missing.png", "b.png")

        assert response.status_code == 404

    def test_conflict(self, client):
        _upload(client, "a.png", b"A")
        _upload(client, "b.png", b"B")

        response = _rename(client, "a.png", "b.png")

        assert response.status_code == 409
        assert response.json()["detail"]["message"] == "File already exists."
        assert sorted(a["name"] for a in client.get("/api/assets").json()) == [
            "a.png",
            "b.png",
        ]

    @pytest.mark.parametrize("new_name", ["..", "a/b.png", "a\\b.png", "x..png"])
    def test_invalid_targets(self, client, new_name: str):
        _upload(client, "a.png", b"A")

        response = _rename(client, "a.png", new_name)

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_NAME"

    def test_cannot_rename_to_served_html(self, client):
        """이미지로 올린 HTML을 .html로 바꿔 서빙할 수 없음."""
        _upload(client, "a.png", b"<script>alert(1)</script>")

        response = _rename(client, "a.png", "evil.html")

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "UNSUPPORTED_EXTENSION"
        assert [a["name"] for a in client.get("/api/assets").json()] == ["a.png"]

        page = client.get("/evil.html")
        assert "<script>alert(1)</script>" not in page.text


# =============================================================================
# Static files / pages
# =============================================================================


class TestPages:
    """저장 파일 서빙 + 대시보드 fallback."""

    def test_serves_stored_bytes(self, client):
        _upload(client, "avatar.png", b"\x89PNG raw bytes")

        response = client.get("/avatar.png")

        assert response.status_code == 200
        assert response.content == b"\x89PNG raw bytes"

    def test_missing_image_is_404(self, client):
        assert client.get("/missing.png").status_code == 404

    def test_unknown_api_path_is_404(self, client):
        assert client.get("/api/unknown").status_code == 404

    def test_dashboard(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "ServerGuard" in response.text
        assert "const PING_INTERVAL_MS = 1000;" in response.text

    def test_spa_fallback(self, client):
        response = client.get("/settings/profile")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "/api/health" in response.text
