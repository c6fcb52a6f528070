"""앱 API 라우터 패키지 — 점검자용 엔드포인트 통합.

App API Router package — Aggregates inspector-facing endpoints.
Inspectors identify themselves in the submission body; no token needed.

Included routers:
    - inspections: 일일 장비 점검 제출 (Daily apparatus checkout)
    - vehicle_inspections: ICS-212 차량 안전 점검 (ICS-212 vehicle safety inspection)
"""

from fastapi import APIRouter

from app.api.app.inspections import router as inspections_router
from app.api.app.vehicle_inspections import router as vehicle_inspections_router

app_router: APIRouter = APIRouter()

app_router.include_router(inspections_router, prefix="/inspections", tags=["Inspections"])
app_router.include_router(
    vehicle_inspections_router, prefix="/vehicle-inspections", tags=["ICS-212"]
)
