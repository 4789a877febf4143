# backend/utils/settings.py

import os
from typing import List
from pydantic import BaseModel


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class ParserOptions(BaseModel):
    """
    Knobs for CSV tokenization.
      - trim_cells: strip whitespace around every cell
      - skip_blank_lines: drop blank lines before counting records
    """
    trim_cells: bool = False
    skip_blank_lines: bool = True


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: List[str] = ["*"]
    log_level: str = "INFO"
    max_upload_bytes: int = 10_485_760
    parser: ParserOptions = ParserOptions()
    dedupe_matches: bool = False
    not_found_on_empty_match: bool = False


def load_settings() -> Settings:
    """
    Build Settings from the environment. Unset variables keep their defaults.
    """
    origins = os.getenv("CORS_ALLOWED_ORIGINS", "*").split(",")

    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3000),
        allowed_origins=[o.strip() for o in origins if o.strip()] or ["*"],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        max_upload_bytes=_env_int("MAX_UPLOAD_BYTES", 10_485_760),
        parser=ParserOptions(
            trim_cells=_env_bool("CSV_TRIM_CELLS", False),
            skip_blank_lines=_env_bool("CSV_SKIP_BLANK_LINES", True),
        ),
        dedupe_matches=_env_bool("SEARCH_DEDUPE_MATCHES", False),
        not_found_on_empty_match=_env_bool("NOT_FOUND_ON_EMPTY_MATCH", False),
    )
