import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir, user_documents_dir

APP_NAME = "ficha-pre-avaliacao"
APP_AUTHOR = "ficha-pre-avaliacao"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on", "sim"}


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _resolve_data_dir() -> Path:
    env_dir = os.getenv("INTAKE_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path(user_data_dir(APP_NAME, APP_AUTHOR))


DATA_DIR = _resolve_data_dir()
LOG_DIR = DATA_DIR / "logs"
DB_FILE = Path(os.getenv("INTAKE_DB_FILE") or (DATA_DIR / "app.db"))
EXPORT_DIR = Path(os.getenv("INTAKE_EXPORT_DIR") or user_documents_dir())

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOG_DIR.mkdir(parents=True, exist_ok=True)
DB_FILE.parent.mkdir(parents=True, exist_ok=True)


def default_database_url() -> str:
    # SQLite URL uses forward slashes; as_posix() keeps it cross-platform.
    return f"sqlite:///{DB_FILE.as_posix()}"


@dataclass(frozen=True)
class Settings:
    database_url: str = os.getenv("DATABASE_URL", default_database_url())
    echo_sql: bool = _env_bool("SQL_ECHO", False)
    resend_api_key: str = os.getenv("RESEND_API_KEY", "")
    resend_api_url: str = os.getenv("INTAKE_RESEND_API_URL", "https://api.resend.com/emails")
    notify_from: str = os.getenv("INTAKE_NOTIFY_FROM", "Formulário Médico <onboarding@resend.dev>")
    notify_to: str = os.getenv("INTAKE_NOTIFY_TO", "consultorio@example.com")
    http_timeout: float = _env_float("INTAKE_HTTP_TIMEOUT", 30.0)
    pdf_font_path: str = os.getenv("INTAKE_PDF_FONT", "")


settings = Settings()
