from __future__ import annotations

import os
import shutil
from collections.abc import Generator
from pathlib import Path
from uuid import uuid4

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
_ARTIFACTS = Path("pytest_artifacts").resolve()
os.environ.setdefault("INTAKE_DATA_DIR", str(_ARTIFACTS / "data"))
os.environ.setdefault("INTAKE_EXPORT_DIR", str(_ARTIFACTS / "exports"))
os.environ.setdefault("RESEND_API_KEY", "")


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def tmp_path() -> Generator[Path, None, None]:
    base = _ARTIFACTS
    base.mkdir(parents=True, exist_ok=True)
    path = base / uuid4().hex
    path.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
