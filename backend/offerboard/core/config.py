from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central settings object.
    Values come from env vars; locally you can use backend/.env.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Feature gate for the whole /v1/offers surface
    OFFERS_ENABLED: bool = True

    # Link building
    SITE_URL: str = "http://localhost:2368/"
    MEMBERS_ADMIN_PATH: str = "/ghost/#/members"

    # Pricing
    DEFAULT_CURRENCY: str = "USD"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Versioning
    APP_VERSION: str = "0.1.0"
    BUILD_ID: str = "dev"


# ✅ MUST EXIST: other modules import this
settings = Settings()
