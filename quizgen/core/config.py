from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정 (.env 또는 환경변수에서 로드)"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    allowed_origins: str = "http://localhost:5173"

    # 브라우저 localStorage 대체: AI 설정을 저장하는 JSON 파일
    settings_file: Path = Path.home() / ".quizgen" / "storage.json"
    log_dir: Path = Path("logs")

    # None이면 타임아웃 없음 (응답이 올 때까지 대기)
    http_timeout: float | None = None
    anthropic_version: str = "2023-06-01"
    claude_max_tokens: int = 1000

    @property
    def allowed_origins_list(self) -> list[str]:
        """ALLOWED_ORIGINS 콤마 구분 문자열을 리스트로 변환"""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


settings = Settings()
