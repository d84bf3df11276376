from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SHOP_NAME: str = "Just ForYou Nail salon"
    SHOP_TIMEZONE: str = "Asia/Taipei"

    OPENING_HOUR: int = 10
    CLOSING_HOUR: int = 20
    SLOT_STEP_MINUTES: int = 30
    WEEKLY_CLOSED_DAY: int | None = 2  # Monday=0; 2 is Wednesday

    GAS_URL: str = ""
    GATEWAY_TIMEOUT_SECONDS: float = 10.0

    LINE_PROFILE_ENDPOINT: str = "https://api.line.me/v2/profile"
    ANONYMOUS_DISPLAY_NAME: str = "Guest"


settings = Settings()
