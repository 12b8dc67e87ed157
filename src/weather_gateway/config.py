from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    port: int = 8080
    host: str = "0.0.0.0"
    public_dir: Path = Path("public")
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    request_timeout: float = 8.0
    log_dir: Path = Path("logs")
    log_level: str = "INFO"


config = Config()
