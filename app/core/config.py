from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "StudyHall Owner API"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "changeme"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "12345"
    POSTGRES_DB: str = "studyhall_db"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Reporting: halls are assumed open 12h/day when computing utilization
    OPERATING_HOURS_PER_DAY: int = 12

    # Seat layout bounds (canvas is 800x600 in the owner seat editor)
    SEAT_X_MAX: int = 800
    SEAT_Y_MAX: int = 600
    SEAT_PRICE_MIN: Decimal = Decimal("50.00")
    SEAT_PRICE_MAX: Decimal = Decimal("1000.00")
    SEAT_NUMBER_MAX_LENGTH: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
