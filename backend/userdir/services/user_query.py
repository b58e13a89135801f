# 사용자 목록 조회 로직
# - name/email 부분 문자열 필터 (대소문자 무시, AND 조합)
# - page/limit 페이지네이션 + 메타데이터 계산
# 저장소 스냅샷과 쿼리 값만 받아서 계산하는 순수 로직입니다.

import math
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from ..models.user import User

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]+)")
# 이보다 긴 숫자는 _MAX_QUERY_INT 로 자릅니다 (어차피 빈 페이지).
_MAX_QUERY_DIGITS = 18
_MAX_QUERY_INT = 10 ** _MAX_QUERY_DIGITS


def parse_positive_int(raw: Any, default: int) -> int:
    """쿼리 문자열을 양의 정수로 읽습니다.

    주니어 개발자님께: "2abc"처럼 앞쪽 숫자만 유효해도 2로 읽고,
    숫자가 아니거나 0 이하이면 기본값을 씁니다.
    """
    if raw is None:
        return default
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        match = _LEADING_INT.match(str(raw))
        if not match:
            return default
        sign, digits = match.groups()
        digits = digits.lstrip("0") or "0"
        if sign == "-" or digits == "0":
            return default
        value = _MAX_QUERY_INT if len(digits) > _MAX_QUERY_DIGITS else int(digits)
    return value if value > 0 else default


@dataclass(frozen=True)
class UserQuery:
    name: Optional[str] = None
    email: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_params(
        cls,
        name: Optional[str] = None,
        email: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> "UserQuery":
        return cls(
            name=name or None,
            email=email or None,
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=parse_positive_int(limit, default_limit),
        )


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_users: int
    has_next: bool
    has_prev: bool


def filter_users(users: Sequence[User], query: UserQuery) -> List[User]:
    result = list(users)
    if query.name:
        needle = query.name.lower()
        result = [u for u in result if needle in u.name.lower()]
    if query.email:
        needle = query.email.lower()
        result = [u for u in result if needle in u.email.lower()]
    return result


def paginate(users: Sequence[User], query: UserQuery) -> Tuple[List[User], Pagination]:
    start = (query.page - 1) * query.limit
    end = start + query.limit
    total = len(users)
    pagination = Pagination(
        current_page=query.page,
        total_pages=math.ceil(total / query.limit),
        total_users=total,
        has_next=end < total,
        has_prev=start > 0,
    )
    return list(users[start:end]), pagination


def run_query(snapshot: Sequence[User], query: UserQuery) -> Tuple[List[User], Pagination]:
    return paginate(filter_users(snapshot, query), query)
