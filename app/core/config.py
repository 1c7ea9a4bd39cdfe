from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    CLUB_NAME: str = "ACS BUTTERFLY"
    DATABASE_URL: str = "sqlite:///./clubsite.db"
    SECRET_KEY: str = "YOUR_SECRET_KEY_HERE"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    LOG_LEVEL: str = "INFO"
    RECENT_MATCHES_LIMIT: int = 3
    # The sign-up form lets a new account ask for the organizer role
    ALLOW_ROLE_SELECTION: bool = True

    class Config:
        env_file = ".env"

settings = Settings()
