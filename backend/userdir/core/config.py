# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 기본값을 제공하여 로컬 실행 편의성 확보

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 프로젝트 루트 디렉토리 경로 찾기
# 주니어 개발자님께: 이 파일은 backend/userdir/core/config.py에 있으므로,
# 3단계 상위로 올라가면 프로젝트 루트가 됩니다.
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    APP_NAME: str = "user-directory"
    # "production"이면 500 응답에 에러 상세(메시지/스택)를 숨깁니다.
    ENV: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    API_VERSION: str = "1.0.0"

    CORS_ALLOW_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"

    # 시작 시 샘플 사용자 3명(John Doe, Jane Smith, Bob Johnson)을 넣을지 여부
    SEED_SAMPLE_USERS: bool = True
    # page/limit 쿼리가 없거나 잘못된 경우 사용하는 기본 limit
    DEFAULT_PAGE_LIMIT: int = Field(default=10, gt=0)

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.ENV.strip().lower() == "production"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


settings = Settings()
