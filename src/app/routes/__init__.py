"""
FastAPI Routes.

API 라우트 (REST) + 페이지 라우트 (대시보드, 정적 파일)
"""

from . import assets, pages

__all__ = ["assets", "pages"]
