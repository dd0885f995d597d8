from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "Shortcode Registry"
    app_version: str = "1.0.0"
    base_url: str = "http://127.0.0.1:8000"

    # Short code generation
    short_code_length: int = 8
    short_code_strategy: str = "random"  # Options: "random", "secure"
    max_generation_attempts: int = 5000  # Keyspace saturation guard

    # Expiry
    default_validity_minutes: int = 30

    # Persistence settings
    persistence_backend: str = "json"  # Options: "json", "memory", "null"
    persistence_path: str = "shortened-urls.json"

    # Geolocation settings
    geolocation_backend: str = "static"  # Options: "static", "http"
    geolocation_placeholder: str = "India / AP"
    geolocation_url: str = "http://ip-api.com/json/{ip}"
    geolocation_timeout: float = 2.0  # Seconds

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
