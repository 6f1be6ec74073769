from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./sitecalc.db"
    APP_NAME: str = "SiteCalc"
    LOG_LEVEL: str = "INFO"

    # Engine display defaults, callers may override per request
    CURRENCY: str = "INR"
    DISPLAY_PRECISION: int = 3

    class Config:
        env_file = ".env"


settings = Settings()
