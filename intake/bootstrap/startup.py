from __future__ import annotations

import logging
import traceback
from pathlib import Path

from alembic import command
from alembic.config import Config
from PySide6.QtWidgets import QMessageBox

MIGRATIONS_SUBDIR = Path("intake") / "infrastructure" / "db" / "migrations"

logger = logging.getLogger(__name__)


def check_startup_prerequisites(root_dir: Path, db_file: Path) -> bool:
    if not (root_dir / "alembic.ini").exists():
        QMessageBox.critical(
            None,
            "Erro",
            "Arquivo alembic.ini ausente. Verifique a instalação do aplicativo.",
        )
        return False
    if not (root_dir / MIGRATIONS_SUBDIR).exists():
        QMessageBox.critical(
            None,
            "Erro",
            "Diretório de migrações ausente. Verifique a instalação do aplicativo.",
        )
        return False
    try:
        probe = db_file.parent / ".write_test"
        probe.write_text("ok", encoding="utf-8")
        probe.unlink(missing_ok=True)
    except OSError:
        QMessageBox.critical(
            None,
            "Erro",
            f"Sem permissão de escrita no diretório do banco de dados: {db_file.parent}",
        )
        return False
    return True


def build_alembic_config(root_dir: Path, database_url: str) -> Config:
    cfg = Config(str(root_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(root_dir / MIGRATIONS_SUBDIR))
    cfg.set_main_option("sqlalchemy.url", database_url)
    # Application logging is already configured; keep alembic from resetting it.
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(root_dir: Path, database_url: str, log_dir: Path, db_file: Path) -> bool:
    try:
        command.upgrade(build_alembic_config(root_dir, database_url), "head")
        return True
    except Exception:  # noqa: BLE001
        logger.exception("Failed to run migrations")
        error_path = log_dir / "migration_error.log"
        try:
            error_path.parent.mkdir(parents=True, exist_ok=True)
            with error_path.open("a", encoding="utf-8") as handle:
                handle.write("\n--- Migration error ---\n")
                handle.write(f"DB: {db_file}\n")
                handle.write(f"Migrations: {root_dir / MIGRATIONS_SUBDIR}\n")
                handle.write(traceback.format_exc())
        except OSError:
            logger.exception("Failed to write migration error log")
        QMessageBox.critical(
            None,
            "Erro",
            f"Não foi possível aplicar as migrações do banco de dados.\nDetalhes: {error_path}",
        )
        return False


def initialize_database(*, root_dir: Path, db_file: Path, database_url: str, log_dir: Path) -> bool:
    if not check_startup_prerequisites(root_dir, db_file):
        return False
    return run_migrations(root_dir, database_url, log_dir, db_file)
