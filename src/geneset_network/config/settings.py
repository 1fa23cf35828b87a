from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GENESET_NETWORK_")

    log_json: bool = False
    log_level: str = "INFO"
    network_config_path: Path = Path("./config/network.yaml")
    stopwords_path: Path | None = None
    output_dir: Path = Path("./network_output")


@lru_cache
def get_settings() -> Settings:
    return Settings()
