"""
파일명 정책: 경로 탐색 방지, 확장자 판별, 업로드 파일명 복원.

규칙:
- .., /, \\ 포함 시 reject (rename 대상, 업로드 대상 모두)
- 확장자 비교는 대소문자 무시
- latin-1로 잘못 해석된 UTF-8 파일명은 복원, 실패 시 원래 이름 사용
"""

from src.domain.constants import FORBIDDEN_NAME_TOKENS, IMAGE_EXTENSIONS
from src.domain.errors import AssetError, ErrorCodes


def validate_asset_name(name: str) -> None:
    """
    저장소 파일명 유효성 검증.

    Args:
        name: 검증할 파일명

    Raises:
        AssetError: INVALID_INPUT (빈 값), INVALID_NAME (금지 토큰 포함)
    """
    if not name:
        raise AssetError(ErrorCodes.INVALID_INPUT, "Missing filename.")

    found = [token for token in FORBIDDEN_NAME_TOKENS if token in name]
    if found:
        raise AssetError(
            ErrorCodes.INVALID_NAME,
            "Invalid filename.",
            name=name,
            forbidden=found,
        )


def get_extension(name: str) -> str:
    """소문자 확장자 (점 없이). 없으면 빈 문자열."""
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext.lower()


def has_allowed_extension(
    name: str,
    allowlist: tuple[str, ...] = IMAGE_EXTENSIONS,
) -> bool:
    """목록에 노출 가능한 확장자인지."""
    return get_extension(name) in allowlist


def decode_upload_filename(raw_name: str) -> str:
    """
    업로드 파일명 복원.

    multipart 헤더의 UTF-8 바이트가 latin-1 (1바이트=1문자)로 해석되어
    들어오는 경우가 있음 → latin-1로 다시 인코딩 후 UTF-8로 디코딩.

    - ASCII: 그대로
    - 이미 올바른 유니코드 (latin-1 인코딩 불가 / UTF-8 디코딩 불가): 그대로

    Args:
        raw_name: 클라이언트가 보낸 파일명

    Returns:
        복원된 파일명 (실패 시 raw_name)
    """
    try:
        return raw_name.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw_name
