import logging
import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

load_dotenv()

@dataclass(frozen=True)
class Settings:
    db_path: str = "culture.db"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    def __post_init__(self):
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level {self.log_level!r}")

    def with_overrides(self, **overrides) -> "Settings":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

def get_settings() -> Settings:
    port = os.getenv("CULTURE_KERNEL_PORT", "8080")
    try:
        port_num = int(port)
    except ValueError:
        raise ValueError(f"CULTURE_KERNEL_PORT must be an integer, got {port!r}") from None
    return Settings(
        db_path=os.getenv("CULTURE_KERNEL_DB", "culture.db"),
        host=os.getenv("CULTURE_KERNEL_HOST", "0.0.0.0"),
        port=port_num,
        log_level=os.getenv("CULTURE_KERNEL_LOG_LEVEL", "INFO").upper(),
    )
