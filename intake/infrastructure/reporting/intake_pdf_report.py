from __future__ import annotations

import io
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from intake.infrastructure.reporting.pdf_fonts import get_pdf_font_name
from intake.infrastructure.reporting.report_sections import ReportSection, build_report_sections, format_date

REPORT_TITLE = "Ficha de Pré-Avaliação Médica"

_MARGIN = 18 * mm
_FOOTER_HEIGHT = 12 * mm
_LINE_HEIGHT = 4.6 * mm
_SECTION_GAP = 3 * mm
_LABEL_WIDTH = 62 * mm
_INDENT = 4 * mm


class _PageWriter:
    """Tracks the cursor on the canvas and breaks pages when content overflows."""

    def __init__(self, pdf: canvas.Canvas, *, font: str, generated_at: datetime) -> None:
        self.pdf = pdf
        self.font = font
        self.generated_at = generated_at
        self.width, self.height = A4
        self.page = 1
        self.y = self.height - _MARGIN

    @property
    def content_width(self) -> float:
        return self.width - 2 * _MARGIN

    def ensure_space(self, needed: float) -> None:
        if self.y - needed >= _MARGIN + _FOOTER_HEIGHT:
            return
        self._draw_footer()
        self.pdf.showPage()
        self.page += 1
        self.y = self.height - _MARGIN

    def finish(self) -> None:
        self._draw_footer()
        self.pdf.showPage()

    def _draw_footer(self) -> None:
        self.pdf.setFont(self.font, 7)
        self.pdf.setFillColor(colors.grey)
        self.pdf.drawString(_MARGIN, _MARGIN / 2, f"Gerado em {self.generated_at.strftime('%d/%m/%Y %H:%M')}")
        self.pdf.drawRightString(self.width - _MARGIN, _MARGIN / 2, f"Página {self.page}")
        self.pdf.setFillColor(colors.black)


def render_intake_pdf(values: Mapping[str, Any], *, generated_at: datetime | None = None) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    font = get_pdf_font_name()
    full_name = str(values.get("full_name") or "").strip()
    pdf.setTitle(f"{REPORT_TITLE} - {full_name}" if full_name else REPORT_TITLE)

    writer = _PageWriter(pdf, font=font, generated_at=generated_at or datetime.now())
    _draw_header(writer, values)
    for section in build_report_sections(values):
        _draw_section(writer, section)
    writer.finish()
    pdf.save()
    return buffer.getvalue()


def export_intake_pdf(values: Mapping[str, Any], file_path: str | Path) -> Path:
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(render_intake_pdf(values))
    return file_path


def _draw_header(writer: _PageWriter, values: Mapping[str, Any]) -> None:
    pdf = writer.pdf
    pdf.setFont(writer.font, 14)
    pdf.drawCentredString(writer.width / 2, writer.y, REPORT_TITLE.upper())
    writer.y -= 6 * mm
    pdf.setFont(writer.font, 9)
    pdf.drawCentredString(
        writer.width / 2,
        writer.y,
        f"Data de preenchimento: {format_date(values.get('fill_date'))}",
    )
    writer.y -= 3 * mm
    pdf.setLineWidth(0.8)
    pdf.line(_MARGIN, writer.y, writer.width - _MARGIN, writer.y)
    writer.y -= 6 * mm


def _draw_section(writer: _PageWriter, section: ReportSection) -> None:
    pdf = writer.pdf
    # Keep the title together with at least its first line.
    writer.ensure_space(_LINE_HEIGHT * 3)
    pdf.setFillColor(colors.whitesmoke)
    pdf.rect(_MARGIN, writer.y - 1.6 * mm, writer.content_width, _LINE_HEIGHT + 1 * mm, stroke=0, fill=1)
    pdf.setFillColor(colors.black)
    pdf.setFont(writer.font, 10)
    pdf.drawString(_MARGIN + 1.5 * mm, writer.y, section.title.upper())
    writer.y -= _LINE_HEIGHT + 1.5 * mm

    pdf.setFont(writer.font, 8.5)
    for line in section.lines:
        left = _MARGIN + (_INDENT if line.indent else 0)
        label_width = _LABEL_WIDTH - (_INDENT if line.indent else 0)
        value_left = _MARGIN + _LABEL_WIDTH + 2 * mm
        value_width = writer.width - _MARGIN - value_left

        label_lines = simpleSplit(f"{line.label}:", writer.font, 8.5, label_width)
        value_lines = simpleSplit(line.value, writer.font, 8.5, value_width) or [""]
        rows = max(len(label_lines), len(value_lines))
        for index in range(rows):
            writer.ensure_space(_LINE_HEIGHT)
            pdf.setFont(writer.font, 8.5)
            if index < len(label_lines):
                pdf.setFillColor(colors.dimgrey)
                pdf.drawString(left, writer.y, label_lines[index])
                pdf.setFillColor(colors.black)
            if index < len(value_lines):
                pdf.drawString(value_left, writer.y, value_lines[index])
            writer.y -= _LINE_HEIGHT
    writer.y -= _SECTION_GAP
