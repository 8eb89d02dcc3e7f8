from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_TITLE: str = "CoolBreeze HVAC Diagnostics"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Flow registry refuses flows whose longest path needs more answers than this
    MAX_FLOW_ANSWERS: int = 7

    # Business Information (shown in completion messages)
    COMPANY_PHONE: str = "(555) 123-4567"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
