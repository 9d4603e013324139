from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./data/db.sqlite3"
    api_key: str = ""  # empty = no auth check (local dev)
    data_dir: str = "./data"
    uploads_dir: str = "./data/uploads"
    # embedded: inline images as data URLs, remote: object storage base URL,
    # static: paths served by this host (or asset_base_url when set)
    asset_mode: Literal["embedded", "remote", "static"] = "static"
    asset_base_url: str = ""
    upload_url_prefix: str = "/uploads"
    max_inline_image_bytes: int = 5 * 1024 * 1024  # 5MB
    seed_demo_data: bool = False
    cors_origins: list[str] = ["http://localhost:8000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
