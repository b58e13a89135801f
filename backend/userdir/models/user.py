# User 도메인 모델 (pydantic)
# - 이름, 이메일, 생성일/수정일
# - 저장소(InMemoryUserRepository)만 이 객체를 수정합니다.
# - JSON 키는 camelCase (createdAt, updatedAt)

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def to_iso(value: datetime) -> str:
    # 모든 응답 시각은 밀리초 + "Z" 형식 (예: 2024-01-01T09:00:00.000Z)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(gt=0)
    name: str
    email: str  # 항상 소문자 + trim 된 값
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_serializer("created_at", "updated_at", when_used="json")
    def _serialize_timestamp(self, value: datetime) -> str:
        return to_iso(value)

    def touch(self) -> None:
        # 시계가 뒤로 가도 updated_at >= created_at 유지
        self.updated_at = max(utcnow(), self.created_at)
