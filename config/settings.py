"""
Application settings loaded from environment variables.
"""

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_title: str = "Data Pipes Connectors"
    log_level: str = "INFO"
    debug: bool = False

    # ── Server ───────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list = ["*"]
    api_prefix: str = "/api/v1"

    # ── Connectors ───────────────────────────────────────────────────────
    # dotted module names, each exposing a module-level ``connector``
    connector_modules: List[str] = []

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


config = Settings()
