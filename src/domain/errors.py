"""
Error definitions for the asset store.

규칙:
- 조용한 실패 금지 → AssetError로 명시적 실패
- OSError는 IO_FAILURE로 감싸고 errno/원인 보존
- HTTP 상태 코드는 에러 코드에서만 결정
"""

from typing import Any


class AssetError(Exception):
    """
    Asset 저장소/서비스 에러.

    Usage:
        raise AssetError(ErrorCodes.NOT_FOUND, "File not found.", name=name)
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        if ctx_str:
            return f"[{self.code}] {self.message} ({ctx_str})"
        return f"[{self.code}] {self.message}"

    @property
    def status_code(self) -> int:
        """대응하는 HTTP 상태 코드."""
        return HTTP_STATUS_BY_CODE.get(self.code, 500)

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Input ===
    INVALID_INPUT = "INVALID_INPUT"  # 파일/이름 누락
    INVALID_NAME = "INVALID_NAME"  # .., /, \ 포함
    UNSUPPORTED_EXTENSION = "UNSUPPORTED_EXTENSION"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # === Store state ===
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # === Filesystem ===
    IO_FAILURE = "IO_FAILURE"
    LOCK_TIMEOUT = "LOCK_TIMEOUT"


HTTP_STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.INVALID_INPUT: 400,
    ErrorCodes.INVALID_NAME: 400,
    ErrorCodes.UNSUPPORTED_EXTENSION: 400,
    ErrorCodes.PAYLOAD_TOO_LARGE: 400,
    ErrorCodes.NOT_FOUND: 404,
    ErrorCodes.CONFLICT: 409,
    ErrorCodes.IO_FAILURE: 500,
    ErrorCodes.LOCK_TIMEOUT: 500,
}


def io_failure(operation: str, error: OSError, **context: Any) -> AssetError:
    """
    OSError → IO_FAILURE 변환 (원인 보존).

    Args:
        operation: 실패한 작업 (list, write, rename, remove)
        error: 원래 OSError
        **context: 추가 컨텍스트 (name 등)

    Returns:
        AssetError (호출자가 raise ... from error)
    """
    return AssetError(
        ErrorCodes.IO_FAILURE,
        f"{operation.capitalize()} failed: {error.strerror or error}",
        operation=operation,
        errno_code=error.errno,
        **context,
    )
