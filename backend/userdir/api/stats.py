# 통계 라우터
# - GET /api/stats : 사용자 수, API 버전, 가동 시간

from fastapi import APIRouter, Depends, Request

from ..schemas.system_schema import StatsResponse
from ..services.system_service import iso_now
from ..services.user_service import UserService, get_user_service

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=StatsResponse, summary="API 통계")
async def api_stats(request: Request, service: UserService = Depends(get_user_service)):
    return StatsResponse(
        total_users=service.total_users(),
        api_version=request.app.state.settings.API_VERSION,
        uptime=request.app.state.process_stats.uptime(),
        timestamp=iso_now(),
    )
