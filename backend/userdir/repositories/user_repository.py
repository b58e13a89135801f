# 사용자 저장소 레이어
# - 메모리 내 사용자 컬렉션 (삽입 순서 유지)
# - 생성/조회/수정/삭제만 담당 (페이지네이션, 필터는 services/user_query.py)
#
# 주니어 개발자님께: FastAPI는 동기(def) 엔드포인트를 스레드풀에서 실행합니다.
# 그래서 모든 연산을 하나의 Lock 안에서 처리해 중간 상태가 보이지 않게 합니다.

import logging
import re
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..core.exceptions import DuplicateEmailError, MalformedIdError, UserNotFoundError
from ..core.validators import validate_email, validate_name
from ..models.user import User, utcnow

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"([+-]?)([0-9]+)")
# 이보다 긴 숫자는 저장소에 존재할 수 없는 ID
_MAX_ID_DIGITS = 18

SAMPLE_USERS = (
    {"name": "John Doe", "email": "john@example.com"},
    {"name": "Jane Smith", "email": "jane@example.com"},
    {"name": "Bob Johnson", "email": "bob@example.com"},
)


def parse_user_id(raw: Any) -> int:
    """외부에서 들어온 ID를 10진수 정수로 해석합니다.

    "12abc", "1.5", "" 같은 값은 MalformedIdError (NotFound와 구분).
    """
    if isinstance(raw, bool):
        raise MalformedIdError(raw)
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    match = _ID_PATTERN.fullmatch(text)
    if not match:
        raise MalformedIdError(raw)
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_ID_DIGITS:
        raise UserNotFoundError(raw)
    return int(sign + digits, 10)


def normalize_email(email: str) -> str:
    return email.lower().strip()


class InMemoryUserRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._users: List[User] = []
        self._next_id = 1

    # ---- 조회 ----

    def list(self) -> List[User]:
        # 스냅샷: 호출자가 수정해도 저장소에는 영향 없음
        with self._lock:
            return [user.model_copy() for user in self._users]

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def get(self, user_id: int) -> User:
        with self._lock:
            return self._find(user_id).model_copy()

    # ---- 변경 ----

    def create(self, name: Any, email: Any) -> User:
        validate_name(name)
        validate_email(email)
        with self._lock:
            if self._email_taken(email):
                logger.warning("Rejected create: duplicate email %s", email)
                raise DuplicateEmailError(email)
            now = utcnow()
            user = User(
                id=self._next_id,
                name=name.strip(),
                email=normalize_email(email),
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._users.append(user)
            logger.info("Created user id=%s email=%s", user.id, user.email)
            return user.model_copy()

    def update(self, user_id: int, changes: Mapping[str, Any]) -> User:
        """changes에 들어있는 필드(name, email)만 수정합니다.

        키가 없으면 그대로 두고, 키가 있으면 값이 None이어도 검증합니다.
        """
        with self._lock:
            user = self._find(user_id)
            if "name" in changes:
                validate_name(changes["name"])
            if "email" in changes:
                validate_email(changes["email"])
                if self._email_taken(changes["email"], exclude_id=user_id):
                    logger.warning("Rejected update of user id=%s: duplicate email", user_id)
                    raise DuplicateEmailError(
                        changes["email"], "Another user with this email already exists"
                    )

            if "name" in changes:
                user.name = changes["name"].strip()
            if "email" in changes:
                user.email = normalize_email(changes["email"])
            user.touch()
            logger.info("Updated user id=%s fields=%s", user_id, sorted(changes))
            return user.model_copy()

    def delete(self, user_id: int) -> User:
        with self._lock:
            user = self._find(user_id)
            self._users.remove(user)
            logger.info("Deleted user id=%s", user_id)
            return user

    def seed(self, users: Iterable[Dict[str, str]] = SAMPLE_USERS) -> List[User]:
        return [self.create(u["name"], u["email"]) for u in users]

    # ---- 내부 헬퍼 (Lock을 잡은 상태에서만 호출) ----

    def _find(self, user_id: int) -> User:
        for user in self._users:
            if user.id == user_id:
                return user
        raise UserNotFoundError(user_id)

    def _email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        wanted = normalize_email(email)
        return any(
            u.email.lower() == wanted and u.id != exclude_id
            for u in self._users
        )
