"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="UniMeal", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, ge=1, le=65535, description="Server port")

    # MongoDB settings
    mongo_uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    mongo_db_name: str = Field(default="unimeal", description="MongoDB database name")
    mongo_server_selection_timeout_ms: int = Field(
        default=5000, ge=1, description="Server selection timeout for the driver"
    )
    db_init_attempts: int = Field(
        default=5, ge=1, description="Store connection retry attempts at startup"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between store connection attempts"
    )

    # Collections
    meals_collection: str = Field(default="meals", description="Published meals")
    upcoming_meals_collection: str = Field(
        default="upcomingMeals", description="Meals open for voting"
    )
    meal_requests_collection: str = Field(
        default="mealRequests", description="Delivery requests"
    )
    users_collection: str = Field(default="users", description="Registered users")

    # Engagement engine
    promotion_like_threshold: int = Field(
        default=10,
        ge=1,
        description="Likes needed to publish an upcoming meal automatically",
    )
    review_rating_min: int = Field(default=1, description="Lowest review rating")
    review_rating_max: int = Field(default=5, description="Highest review rating")
    review_write_attempts: int = Field(
        default=3, ge=1, description="Attempts for a review write that loses a race"
    )
    vote_toggle_attempts: int = Field(
        default=3, ge=1, description="Attempts for a vote toggle that loses a race"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(default="UniMeal API", description="API documentation title")
    api_description: str = Field(
        default="Meal subscription backend: voting, reviews, promotion and delivery requests",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("review_rating_max")
    @classmethod
    def validate_rating_bounds(cls, v, info):
        low = info.data.get("review_rating_min")
        if low is not None and v < low:
            raise ValueError("review_rating_max must not be below review_rating_min")
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()
