import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from bibledb.errors import ConfigError


@dataclass(frozen=True)
class Settings:
    translation_code: str = "KJV"
    translation_name: str = "King James Version"
    translation_language: str = "en"
    temp_db_name: str = "bible_temp.db"
    final_db_name: str = "bible.db"
    compressed_suffix: str = ".gz"
    cleanup_attempts: int = 5
    cleanup_base_delay: float = 0.5
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "Settings":
        # .env is searched for upward from the working directory
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        defaults = cls()

        return cls(
            translation_code=os.getenv("BIBLEDB_TRANSLATION_CODE", defaults.translation_code),
            translation_name=os.getenv("BIBLEDB_TRANSLATION_NAME", defaults.translation_name),
            translation_language=os.getenv("BIBLEDB_TRANSLATION_LANGUAGE", defaults.translation_language),
            cleanup_attempts=_env_number("BIBLEDB_CLEANUP_ATTEMPTS", int, defaults.cleanup_attempts),
            cleanup_base_delay=_env_number("BIBLEDB_CLEANUP_BASE_DELAY", float, defaults.cleanup_base_delay),
            log_level=os.getenv("BIBLEDB_LOG_LEVEL", defaults.log_level).upper(),
        )

    def temp_db_path(self, output_dir: str | Path) -> Path:
        return Path(output_dir) / self.temp_db_name

    def final_db_path(self, output_dir: str | Path) -> Path:
        return Path(output_dir) / self.final_db_name

    def compressed_db_path(self, output_dir: str | Path) -> Path:
        return Path(output_dir) / f"{self.final_db_name}{self.compressed_suffix}"


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e

    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value
