"""
App layer: 웹 서버 (FastAPI).

역할:
- 자산 REST API, 대시보드 페이지, 저장 파일 서빙
- ⚠️ 파일시스템 직접 접근 없음 (core.AssetStore에 위임)

주의: 폴더 구분
- src/app/templates/ → Jinja2 HTML (대시보드)
- public/ (루트, 설정 가능) → 자산 저장소
"""
