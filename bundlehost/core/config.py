from dotenv import load_dotenv
load_dotenv()

import os
from pathlib import Path

from pydantic import BaseModel

DEFAULT_PORT = 3000
DEFAULT_SOURCE_DIR = "minecraft-instances"
DEFAULT_EXTRACTED_DIR = "extracted"

# Extension filter for source bundles
ARCHIVE_SUFFIX = ".zip"
# Fixed route segment used in manifest download URLs
DOWNLOAD_ROUTE = "download"
HASH_ALGORITHM = "sha1"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ServerSettings(BaseModel):
    """Server configuration loaded from the environment (.env supported)"""
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    source_dir: Path = Path(DEFAULT_SOURCE_DIR)
    extracted_dir: Path = Path(DEFAULT_EXTRACTED_DIR)
    public_base_url: str = f"http://localhost:{DEFAULT_PORT}"
    serve_during_startup: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerSettings":
        """Build settings from environment variables.

        PUBLIC_BASE_URL defaults to localhost on the configured port. It must
        match the address clients use to reach the server, otherwise manifest
        URLs point nowhere.
        """
        port = int(os.getenv("PORT") or DEFAULT_PORT)
        return cls(
            host=os.getenv("HOST") or "0.0.0.0",
            port=port,
            source_dir=Path(os.getenv("SOURCE_DIR") or DEFAULT_SOURCE_DIR),
            extracted_dir=Path(os.getenv("EXTRACTED_DIR") or DEFAULT_EXTRACTED_DIR),
            public_base_url=os.getenv("PUBLIC_BASE_URL") or f"http://localhost:{port}",
            serve_during_startup=_env_bool("SERVE_DURING_STARTUP", True),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
