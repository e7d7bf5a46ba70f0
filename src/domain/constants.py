"""
Domain Constants: 저장소 전역 상수.

파일명 정책, 업로드 제한, 표시 이름 매핑 등.
default.yaml에서 오버라이드 가능한 값은 기본값으로만 사용.
"""

# =============================================================================
# Store (자산 저장소)
# =============================================================================

DEFAULT_STORE_DIRNAME = "public"
STORE_LOCKS_DIRNAME = ".locks"
STORE_LOCK_FILENAME = "store.lock"
STORE_LOCK_TIMEOUT_SECONDS = 10.0

# 목록에 노출되는 확장자 (대소문자 무시, 점 없이)
IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "webp")

# 업로드 최대 크기 (10 MiB)
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# multipart 경계/파트 헤더 여유분 (Content-Length 사전 거부 기준)
MULTIPART_OVERHEAD_BYTES = 64 * 1024

# =============================================================================
# Filename Policy (파일명 정책)
# =============================================================================
# 경로 탐색 방지: 아래 토큰이 하나라도 포함되면 reject

PARENT_DIR_TOKEN = ".."
PATH_SEPARATORS = ("/", "\\")
FORBIDDEN_NAME_TOKENS = (PARENT_DIR_TOKEN, *PATH_SEPARATORS, "\x00")

# =============================================================================
# Display Names (표시 이름)
# =============================================================================
# 알려진 파일명 → 사람이 읽기 쉬운 이름. 매핑 없으면 원래 파일명 사용.

DEFAULT_DISPLAY_NAMES = {
    "cover-card.png": "应用封面",
    "donate-qrcode1.png": "赞赏码",
    "avatar.png": "用户头像",
    "banner.png": "横幅广告",
}

# =============================================================================
# Server / UI
# =============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_PING_INTERVAL_MS = 5000
RUNTIME_NAME = "python"
API_BANNER = "ServerGuard API is running"
