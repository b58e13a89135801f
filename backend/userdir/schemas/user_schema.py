# 요청/응답 스키마 정의 (Pydantic 모델)
#
# 주니어 개발자님께: 요청 스키마의 필드는 일부러 Any 입니다.
# 타입/형식 검증은 core/validators.py가 정해진 순서와 메시지로 처리해야 하므로,
# pydantic이 먼저 422로 막아버리지 않게 합니다.

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models.user import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    email: Any = None


class UserUpdate(BaseModel):
    """부분 수정 요청. 보내지 않은 필드는 model_fields_set 에 없습니다."""
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    email: Any = None

    def changes(self) -> Dict[str, Any]:
        return {field: getattr(self, field) for field in self.model_fields_set}


class PaginationOut(CamelModel):
    current_page: int
    total_pages: int
    total_users: int
    has_next: bool
    has_prev: bool


class UserListResponse(BaseModel):
    users: List[User]
    pagination: PaginationOut


class UserMessageResponse(BaseModel):
    message: str
    user: User


class DeletedUser(BaseModel):
    id: int
    name: str
    email: str


class UserDeleteResponse(CamelModel):
    message: str
    deleted_user: DeletedUser


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Dict[str, Optional[str]]] = None
