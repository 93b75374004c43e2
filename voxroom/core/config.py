from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = "dev"
    ADMIN_KEY: str = ""                   # empty disables the admin endpoint

    ROOM_IDLE_TTL_SECONDS: float = 600     # empty rooms older than this get reaped
    ROOM_SWEEP_INTERVAL_SECONDS: float = 60

    MAX_ROOM_ID_BYTES: int = 32
    MAX_DISPLAY_NAME_BYTES: int = 64
    MAX_MESSAGE_BYTES: int = 4000
    OUTBOX_MAX_SIZE: int = 256            # queued outbound frames per connection

    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False


settings = Settings()
