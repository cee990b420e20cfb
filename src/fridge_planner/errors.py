"""Error taxonomy shared by services and the HTTP layer."""


class FridgePlannerError(Exception):
    """Base error carrying a user-facing message and an HTTP status."""

    status_code = 500
    default_message = "오류가 발생했습니다."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(FridgePlannerError):
    """A required credential or setting is missing."""

    default_message = "API 키가 설정되지 않았습니다."


class InvalidRequestError(FridgePlannerError):
    """The caller supplied empty or malformed input."""

    status_code = 400
    default_message = "요청이 올바르지 않습니다."


class AuthorizationError(FridgePlannerError):
    """No authenticated user is attached to the request."""

    status_code = 401
    default_message = "로그인이 필요합니다."


class NotFoundError(FridgePlannerError):
    """The addressed row does not exist for this user."""

    status_code = 404
    default_message = "항목을 찾을 수 없습니다."


class UpstreamRateLimitError(FridgePlannerError):
    """The AI provider kept rate limiting after every retry."""

    status_code = 429
    default_message = "잠시 후 다시 시도해주세요."


class UpstreamTransportError(FridgePlannerError):
    """The upstream call failed or timed out before returning a reply."""

    status_code = 500
    default_message = "외부 서비스 호출에 실패했습니다."


class MalformedOutputError(FridgePlannerError):
    """The upstream replied, but no structured data could be extracted."""

    status_code = 500
    default_message = "응답을 해석하지 못했습니다."

    def __init__(self, message: str | None = None, stage: str = "parse") -> None:
        super().__init__(message)
        self.stage = stage
