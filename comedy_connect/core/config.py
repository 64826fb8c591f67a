from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Comedy Connect API"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "changeme"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "comedy_connect"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""
    CREATE_DATABASE_ON_STARTUP: bool = True

    # Fees (percentages). Slabs below are fractions of the ticket total.
    DEFAULT_PLATFORM_FEE_PERCENT: float = 8.0
    DEFAULT_BOOKING_FEE_PERCENT: float = 8.0
    DEFAULT_FEE_SLABS: list[dict] = [
        {"min_price": 0, "max_price": 199, "fee": 0.07},
        {"min_price": 200, "max_price": 400, "fee": 0.08},
        {"min_price": 401, "max_price": 1000000, "fee": 0.09},
    ]

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
