from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Remote GraphQL backend
    GRAPHQL_URL: str = "http://localhost:1337/graphql"
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    # Security
    JWT_SECRET: Optional[str] = None  # Verify bearer tokens only when the backend secret is shared
    ALGORITHM: str = "HS256"

    # Application
    PROJECT_NAME: str = "Zein Bus Booking Service"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:8080", "capacitor://localhost"]

    # Booking
    DEFAULT_DESTINATION: str = "جامعة الجلالة"
    TIMEZONE: str = "Africa/Cairo"
    # Subtract seats already booked for the day instead of trusting the dashboard counter alone
    AGGREGATE_BOOKED_SEATS: bool = False

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
