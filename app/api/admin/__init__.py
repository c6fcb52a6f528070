"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin dashboard endpoints
into a single router for inclusion in the FastAPI application.
Every route except ``/auth/login`` requires an admin Bearer token.

Included routers:
    - auth: 관리자 로그인 (Shared admin password → access token)
    - defects: 결함 목록/해결 (Open defects and resolution)
    - fleet: 차량 편성 현황/재고 부족/점검 로그 (Fleet dashboard aggregation)
    - vehicle_inspections: ICS-212 양식 관리 (ICS-212 form administration)
"""

from fastapi import APIRouter

from app.api.admin.auth import router as auth_router
from app.api.admin.defects import router as defects_router
from app.api.admin.fleet import router as fleet_router
from app.api.admin.vehicle_inspections import router as vehicle_inspections_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(auth_router, prefix="/auth", tags=["Admin Auth"])
admin_router.include_router(defects_router, prefix="/defects", tags=["Defects"])
# 대시보드: /fleet 하위 (Fleet status, low stock, logs, daily submissions)
admin_router.include_router(fleet_router, prefix="/fleet", tags=["Fleet"])
admin_router.include_router(
    vehicle_inspections_router, prefix="/vehicle-inspections", tags=["ICS-212 Admin"]
)
