from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chesscom_api_url: str = "https://api.chess.com"
    default_avatar_url: str = "https://www.chess.com/bundles/web/images/user-image.svg"

    http_timeout: float = 10.0
    user_agent: str = "chesscard/0.1.0"

    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


settings = Settings()
