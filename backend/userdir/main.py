# FastAPI 진입점
# - 메모리 사용자 저장소 생성 (필요하면 샘플 사용자 시드)
# - 라우터 라우팅, CORS 설정, 요청 로깅
# - 예외 -> {"error": ...} JSON 변환
#
# 실행: python -m userdir.main  (또는 uvicorn userdir.main:app)

import logging
import traceback
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, settings
from .core.exceptions import InvalidBodyError, UserDirectoryError
from .repositories.user_repository import InMemoryUserRepository
from .schemas.system_schema import HealthResponse, WelcomeResponse
from .services.system_service import ProcessStats, iso_now
from .api.users import router as users_router
from .api.stats import router as stats_router

logger = logging.getLogger(__name__)

API_ENDPOINTS = [
    "GET /api/users",
    "GET /api/users/:id",
    "POST /api/users",
    "PUT /api/users/:id",
    "DELETE /api/users/:id",
    "GET /api/stats",
]


def _is_api_path(path: str) -> bool:
    return path == "/api" or path.startswith("/api/")


def _not_found_payload(path: str) -> dict:
    if _is_api_path(path):
        return {"error": "API endpoint not found", "availableEndpoints": API_ENDPOINTS}
    return {"error": "Route not found", "message": "The requested endpoint does not exist"}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UserDirectoryError)
    async def user_directory_error_handler(request: Request, exc: UserDirectoryError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        # 주니어 개발자님께: body가 JSON 객체가 아닐 때만 여기로 옵니다.
        # 필드 검증은 core/validators.py 담당입니다.
        logger.warning("Invalid request body for %s %s: %s", request.method, request.url.path, exc.errors())
        error = InvalidBodyError()
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # 매칭되는 라우트가 없거나 메서드가 다르면 404 (/api/* 는 사용 가능한 엔드포인트 목록 포함)
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=_not_found_payload(request.url.path))
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        # 운영 환경에서는 에러 상세를 노출하지 않습니다.
        if request.app.state.settings.is_production:
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "details": str(exc),
                "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            },
        )


def create_app(
    app_settings: Optional[Settings] = None,
    repository: Optional[InMemoryUserRepository] = None,
) -> FastAPI:
    app_settings = app_settings or settings
    logging.basicConfig(
        level=app_settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # FastAPI 애플리케이션 인스턴스 생성
    app = FastAPI(
        title="사용자 디렉토리 API",
        description="메모리 기반 사용자 CRUD + 페이지네이션/필터 서비스",
        version=app_settings.API_VERSION,
    )

    app.state.settings = app_settings
    app.state.process_stats = ProcessStats()
    if repository is None:
        repository = InMemoryUserRepository()
        if app_settings.SEED_SAMPLE_USERS:
            repository.seed()
    app.state.user_repository = repository

    # CORS 허용 도메인 세팅
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    @app.on_event("startup")
    async def on_startup():
        logger.info("Environment: %s", app_settings.ENV)
        logger.info("Health check: http://localhost:%s/health", app_settings.PORT)
        logger.info("API endpoints: http://localhost:%s/api/users", app_settings.PORT)

    @app.on_event("shutdown")
    async def on_shutdown():
        logger.info("Shutting down gracefully...")

    @app.get("/", response_model=WelcomeResponse)
    async def root():
        return WelcomeResponse(
            message="Welcome to the User Directory API",
            version=app_settings.API_VERSION,
            environment=app_settings.ENV,
            timestamp=iso_now(),
            endpoints={
                "health": "/health",
                "users": "/api/users",
                "stats": "/api/stats",
                "documentation": "/docs",
            },
        )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        stats = app.state.process_stats
        return HealthResponse(
            status="healthy",
            uptime=stats.uptime(),
            timestamp=iso_now(),
            memory=stats.memory(),
            version=app_settings.API_VERSION,
        )

    # API 라우터 등록
    app.include_router(users_router, prefix="/api")
    app.include_router(stats_router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
