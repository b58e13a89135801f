# 커스텀 예외 클래스 정의
# 주니어 개발자님께: 모든 예외는 UserDirectoryError를 상속받고,
# 자신이 어떤 HTTP 상태 코드로 변환되어야 하는지 알고 있습니다.
# main.py의 예외 핸들러가 이 정보를 이용해 {"error": ...} JSON으로 바꿉니다.

from typing import Any, Dict, Optional


class UserDirectoryError(Exception):
    """사용자 디렉토리 관련 기본 예외 클래스

    Attributes:
        status_code: 응답으로 내보낼 HTTP 상태 코드
        message: 응답 body의 "error" 값
    """
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class MalformedIdError(UserDirectoryError):
    """경로로 들어온 사용자 ID가 정수가 아닐 때 발생합니다.

    주니어 개발자님께: "존재하지 않는 사용자"(404)와는 다른 상황입니다.
    "abc" 같은 값은 찾아볼 필요도 없이 400으로 처리합니다.
    """
    status_code = 400

    def __init__(self, raw_id: Any, message: str = "Invalid user ID format"):
        self.raw_id = raw_id
        super().__init__(message)


class UserNotFoundError(UserDirectoryError):
    status_code = 404

    def __init__(self, user_id: int, message: str = "User not found"):
        self.user_id = user_id
        super().__init__(message)


class ValidationFailedError(UserDirectoryError):
    """입력 검증 실패 시 발생하는 예외

    Attributes:
        kind: "missing_fields", "invalid_name", "invalid_email" 중 하나
        details: 필드별 에러 메시지 (missing_fields인 경우에만)
    """
    status_code = 400

    MISSING_FIELDS = "missing_fields"
    INVALID_NAME = "invalid_name"
    INVALID_EMAIL = "invalid_email"

    def __init__(self, kind: str, message: str, details: Optional[Dict[str, Optional[str]]] = None):
        self.kind = kind
        self.details = details
        super().__init__(message)

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.details is not None:
            payload["details"] = self.details
        return payload


class DuplicateEmailError(UserDirectoryError):
    """다른 사용자가 이미 같은 이메일(대소문자 무시)을 쓰고 있을 때 발생합니다."""
    status_code = 409

    def __init__(self, email: str, message: str = "User with this email already exists"):
        self.email = email
        super().__init__(message)


class InvalidBodyError(UserDirectoryError):
    """요청 body가 JSON 객체가 아닐 때 발생합니다 (깨진 JSON, 배열 등)."""
    status_code = 400

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message)
