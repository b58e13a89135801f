# 사용자 서비스 레이어
# - 경로 ID 파싱, 필수 필드 검사
# - 저장소 호출 + 목록 조회(필터/페이지네이션) 조합

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends, Request

from ..core.validators import require_fields
from ..models.user import User
from ..repositories.user_repository import InMemoryUserRepository, parse_user_id
from .user_query import Pagination, UserQuery, run_query

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repo: InMemoryUserRepository, default_limit: int = 10):
        self.repo = repo
        self.default_limit = default_limit

    def list_users(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
    ) -> Tuple[List[User], Pagination]:
        query = UserQuery.from_params(name, email, page, limit, default_limit=self.default_limit)
        logger.debug("Listing users with %s", query)
        # 스냅샷을 먼저 떠두고 Lock 밖에서 계산
        return run_query(self.repo.list(), query)

    def get_user(self, raw_id: Any) -> User:
        return self.repo.get(parse_user_id(raw_id))

    def create_user(self, name: Any, email: Any) -> User:
        # 순서: 필수 필드 -> 이름 -> 이메일 -> 중복 (뒤 두 단계는 저장소에서)
        require_fields(name, email)
        return self.repo.create(name, email)

    def update_user(self, raw_id: Any, changes: Dict[str, Any]) -> User:
        return self.repo.update(parse_user_id(raw_id), changes)

    def delete_user(self, raw_id: Any) -> User:
        return self.repo.delete(parse_user_id(raw_id))

    def total_users(self) -> int:
        return self.repo.count()


def get_user_repository(request: Request) -> InMemoryUserRepository:
    return request.app.state.user_repository


def get_user_service(
    request: Request,
    repo: InMemoryUserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(repo, default_limit=request.app.state.settings.DEFAULT_PAGE_LIMIT)
