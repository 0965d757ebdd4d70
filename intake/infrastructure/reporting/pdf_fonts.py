from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from intake.config import settings

_UNICODE_FONT_NAME = "IntakeUnicode"
# Built-in Type 1 font; its WinAnsi encoding covers Portuguese accents.
_FALLBACK_FONT_NAME = "Helvetica"

logger = logging.getLogger(__name__)


def _candidate_font_paths() -> list[Path]:
    paths: list[Path] = []
    if settings.pdf_font_path:
        paths.append(Path(settings.pdf_font_path))

    paths.extend(
        [
            # Windows
            Path("C:/Windows/Fonts/arial.ttf"),
            Path("C:/Windows/Fonts/segoeui.ttf"),
            # Linux
            Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
            Path("/usr/share/fonts/dejavu/DejaVuSans.ttf"),
            Path("/usr/share/fonts/truetype/liberation2/LiberationSans-Regular.ttf"),
            # macOS
            Path("/Library/Fonts/Arial.ttf"),
        ]
    )
    return paths


@lru_cache(maxsize=1)
def get_pdf_font_name() -> str:
    if _UNICODE_FONT_NAME in pdfmetrics.getRegisteredFontNames():
        return _UNICODE_FONT_NAME

    for font_path in _candidate_font_paths():
        if not font_path.exists():
            continue
        try:
            pdfmetrics.registerFont(TTFont(_UNICODE_FONT_NAME, str(font_path)))
            return _UNICODE_FONT_NAME
        except Exception:  # noqa: BLE001
            logger.warning("Could not register PDF font %s", font_path, exc_info=True)
            continue

    logger.info("No TTF font found for PDF export, using %s", _FALLBACK_FONT_NAME)
    return _FALLBACK_FONT_NAME
