from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    AIRTABLE_API_KEY: str | None = None
    AIRTABLE_BASE_ID: str = "appaCJExnWJFtszE3"
    AIRTABLE_TABLE_NAME: str = "Motorcycle Listings"
    AIRTABLE_ENDPOINT: str = "https://api.airtable.com/v0"

    # Where the gateway reaches the proxy boundary (this service by default)
    PROXY_BASE_URL: str = "http://localhost:8000/api/bikes"

    PAGE_SIZE: int = 100  # Airtable max per request
    RETRY_ATTEMPTS: int = 3
    RETRY_DELAY_MS: int = 1000
    REQUEST_TIMEOUT: float = 30.0
    SEARCH_DEBOUNCE_MS: int = 300

    DEFAULT_LANGUAGE: str = "gr"  # "en" or "gr"
    PLACEHOLDER_IMAGE: str = "/assets/placeholder.jpg"
    DEBUG: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
