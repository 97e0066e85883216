from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정 (환경 변수 / .env)"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(
        "sqlite+aiosqlite:///./exam.db",
        description="비동기 DB URL (운영: postgresql+asyncpg://...)",
    )

    # Environment
    environment: str = Field("development", description="development | production")

    # CORS
    allowed_origins: str = Field("http://localhost:5173", description="쉼표로 구분된 허용 origin 목록")

    # 시험 정책
    pass_threshold: int = Field(70, ge=0, le=100, description="합격 기준 (%)")
    autosave_interval_ms: int = Field(10_000, gt=0, description="자동 저장 주기 (ms)")
    tick_interval_seconds: float = Field(1.0, gt=0, description="타이머 틱 간격 (초)")
    warning_banner_seconds: float = Field(3.0, gt=0, description="부정행위 경고 배너 표시 시간 (초)")

    # 시험 클라이언트
    api_base_url: str = Field("http://localhost:8001/api/v1", description="시험 클라이언트가 사용할 API 주소")
    resume_marker_path: str = Field(".exam_resume.json", description="진행 중 시험 재개용 로컬 파일")

    # 로깅
    log_dir: str = Field("/app/logs", description="운영 환경 로그 파일 디렉터리")

    @property
    def allowed_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


settings = Settings()
