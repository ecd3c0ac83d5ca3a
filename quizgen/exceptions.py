"""커스텀 예외 클래스 정의"""


class BaseAppError(Exception):
    """애플리케이션 기본 예외 클래스"""
    
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class MissingCredentialError(BaseAppError):
    """API 키가 설정되지 않았을 때 발생하는 예외 (400)"""
    
    def __init__(self, provider: str | None = None):
        target = f"{provider} " if provider else ""
        super().__init__(f"{target}API 키가 설정되지 않았습니다", status_code=400)


class InvalidSettingsError(BaseAppError):
    """provider 또는 model 설정이 잘못되었을 때 발생하는 예외 (400)"""
    
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class ProviderHTTPError(BaseAppError):
    """AI 제공자가 2xx 이외의 응답을 반환했을 때 발생하는 예외 (502)"""
    
    def __init__(self, provider: str, status: int, body: str, message: str | None = None):
        self.provider = provider
        self.status = status
        self.body = body
        super().__init__(message or f"{provider} error ({status}): {body}", status_code=502)


class EmptyResponseError(BaseAppError):
    """AI 응답에서 텍스트를 추출하지 못했을 때 발생하는 예외 (502)"""
    
    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"{provider} 응답이 비어있습니다", status_code=502)


class MalformedOutputError(BaseAppError):
    """AI 출력이 문제 스키마를 만족하지 않을 때 발생하는 예외 (502)"""
    
    def __init__(self, message: str):
        super().__init__(message, status_code=502)


class InvalidJSONError(MalformedOutputError):
    """AI 출력을 JSON으로 파싱할 수 없을 때 발생하는 예외"""
    
    def __init__(self, detail: str):
        super().__init__(f"Invalid JSON: {detail}")


class MissingFieldError(MalformedOutputError):
    """필수 필드가 누락되었을 때 발생하는 예외"""
    
    def __init__(self, field: str):
        self.field = field
        super().__init__(f'Invalid JSON: missing "{field}" array.')
