# 사용자 라우터
# - GET    /api/users        : 목록 (name/email 필터, page/limit 페이지네이션)
# - GET    /api/users/{id}   : 단건 조회
# - POST   /api/users        : 생성
# - PUT    /api/users/{id}   : 부분 수정
# - DELETE /api/users/{id}   : 삭제
#
# 에러는 UserDirectoryError 예외로 올라가고 main.py의 핸들러가 JSON으로 바꿉니다.

import json
from dataclasses import asdict
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, Request, status

from ..core.exceptions import InvalidBodyError
from ..schemas.user_schema import (
    DeletedUser,
    ErrorResponse,
    PaginationOut,
    UserCreate,
    UserDeleteResponse,
    UserListResponse,
    UserMessageResponse,
    UserUpdate,
)
from ..models.user import User
from ..services.user_service import UserService, get_user_service

router = APIRouter(prefix="/users", tags=["users"])

_ID_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid user ID format"},
    404: {"model": ErrorResponse, "description": "User not found"},
}
_BODY_ERRORS = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    409: {"model": ErrorResponse, "description": "Duplicate email"},
}


async def _read_json_object(request: Request) -> Dict[str, Any]:
    # 빈 body는 "수정할 필드 없음"
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise InvalidBodyError()
    if not isinstance(data, dict):
        raise InvalidBodyError()
    return data


@router.get("", response_model=UserListResponse, summary="사용자 목록 (필터 + 페이지네이션)")
async def list_users(
    name: Optional[str] = None,
    email: Optional[str] = None,
    page: Union[str, None] = None,
    limit: Union[str, None] = None,
    service: UserService = Depends(get_user_service),
):
    users, pagination = service.list_users(name=name, email=email, page=page, limit=limit)
    return UserListResponse(
        users=users,
        pagination=PaginationOut(**asdict(pagination)),
    )


@router.get("/{user_id}", response_model=User, responses=_ID_ERRORS, summary="사용자 단건 조회")
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)


@router.post(
    "",
    response_model=UserMessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_BODY_ERRORS,
    summary="사용자 생성 (이메일 중복 체크 포함)",
)
async def create_user(
    payload: Optional[UserCreate] = None,
    service: UserService = Depends(get_user_service),
):
    payload = payload or UserCreate()
    user = service.create_user(payload.name, payload.email)
    return UserMessageResponse(message="User created successfully", user=user)


@router.put(
    "/{user_id}",
    response_model=UserMessageResponse,
    responses={**_ID_ERRORS, **_BODY_ERRORS},
    summary="사용자 부분 수정 (보낸 필드만 변경)",
)
async def update_user(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    # 순서: ID 형식 -> 존재 여부 -> body 파싱 -> 필드 검증
    service.get_user(user_id)
    payload = UserUpdate.model_validate(await _read_json_object(request))
    user = service.update_user(user_id, payload.changes())
    return UserMessageResponse(message="User updated successfully", user=user)


@router.delete("/{user_id}", response_model=UserDeleteResponse, responses=_ID_ERRORS, summary="사용자 삭제")
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    user = service.delete_user(user_id)
    return UserDeleteResponse(
        message="User deleted successfully",
        deleted_user=DeletedUser(id=user.id, name=user.name, email=user.email),
    )
