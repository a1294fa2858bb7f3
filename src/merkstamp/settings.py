from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MERKSTAMP_")

    # Timestamping server used by `stamp`
    server: str = "https://tzstamp.io"
    root_format: Literal["hex", "decimal", "binary"] = "hex"
    http_timeout: float = 10.0  # seconds, applies to fetch and submit
    read_chunk_size: int = 65536  # bytes per read when hashing files

    def stamp_url(self, server: str | None = None) -> str:
        base = (server or self.server).rstrip("/")
        return f"{base}/api/stamp"

settings = Settings()
