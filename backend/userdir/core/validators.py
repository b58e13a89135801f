# 입력 검증 유틸리티
# - 이름/이메일 형식 검증
# - 필수 필드 존재 여부 검사
# 모두 순수 함수입니다 (저장소 상태를 보지 않음).

import re
from typing import Any, Dict, Optional

from .exceptions import ValidationFailedError

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NAME_MIN_LENGTH = 2

NAME_ERROR = "Name must be a string with at least 2 characters"
EMAIL_ERROR = "Please provide a valid email address"


def is_missing(value: Any) -> bool:
    # 빈 문자열, null, false, 0 은 "값 없음"으로 취급
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


def is_valid_name(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) >= NAME_MIN_LENGTH


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def validate_name(value: Any) -> str:
    if not is_valid_name(value):
        raise ValidationFailedError(ValidationFailedError.INVALID_NAME, NAME_ERROR)
    return value


def validate_email(value: Any) -> str:
    if not is_valid_email(value):
        raise ValidationFailedError(ValidationFailedError.INVALID_EMAIL, EMAIL_ERROR)
    return value


def missing_fields(name: Any, email: Any) -> Optional[Dict[str, Optional[str]]]:
    """생성 요청의 필수 필드 검사 결과를 반환합니다.

    둘 다 있으면 None, 하나라도 없으면 필드별 메시지 딕셔너리
    (있는 필드는 None)를 돌려줍니다.
    """
    name_missing = is_missing(name)
    email_missing = is_missing(email)
    if not name_missing and not email_missing:
        return None
    return {
        "name": "Name is required" if name_missing else None,
        "email": "Email is required" if email_missing else None,
    }


def require_fields(name: Any, email: Any) -> None:
    details = missing_fields(name, email)
    if details is not None:
        raise ValidationFailedError(
            ValidationFailedError.MISSING_FIELDS,
            "Validation failed",
            details=details,
        )
