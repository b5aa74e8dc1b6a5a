from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
load_dotenv()


class HarnessSettings(BaseSettings):
    """Where the harness points and how it talks to the service."""

    model_config = SettingsConfigDict(env_prefix="HARNESS_", env_file=".env", extra="ignore")

    host: str = "http://127.0.0.1:8000"
    timeout: float = 30.0
    headers: dict[str, str] = {}
    log_level: str = "INFO"
    console: bool = False
    seed: Optional[int] = None


settings = HarnessSettings()
