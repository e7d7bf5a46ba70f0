"""
Application Services.

역할:
- assets: 자산 목록/업로드/이름 변경/삭제 (AssetStore 위임)
"""

from .assets import AssetService

__all__ = [
    "AssetService",
]
