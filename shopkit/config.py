from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_version: str | None = None
    max_retries: int = 3
    retry_base_delay: float = 1.0
    retry_max_delay: float = 32.0
    timeout: float = 30.0
    user_agent: str = "shopkit/0.1.0"
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "SHOPKIT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
