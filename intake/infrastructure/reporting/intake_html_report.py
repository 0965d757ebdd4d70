from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from html import escape
from typing import Any

from intake.infrastructure.reporting.report_sections import NOT_INFORMED, build_report_sections, format_date

_STYLE = """
body { font-family: Arial, sans-serif; margin: 20px; line-height: 1.4; }
.header { text-align: center; margin-bottom: 30px; border-bottom: 2px solid #333; padding-bottom: 20px; }
.section { margin-bottom: 25px; }
.section-title { font-weight: bold; font-size: 18px; margin-bottom: 15px; color: #333; background-color: #f5f5f5; padding: 8px; }
.field { margin-bottom: 8px; }
.field.sub { margin-left: 15px; }
.field-label { font-weight: bold; color: #555; }
.field-value { margin-left: 10px; }
""".strip()


def render_form_html(values: Mapping[str, Any]) -> str:
    """Full visible field dump, one block per section. All user text is escaped."""
    full_name = escape(str(values.get("full_name") or ""))
    parts = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="UTF-8">',
        f"<title>Formulário Médico - {full_name}</title>",
        f"<style>{_STYLE}</style>",
        "</head>",
        "<body>",
        '<div class="header">',
        "<h1>FORMULÁRIO MÉDICO COMPLETO</h1>",
        f"<p><strong>Data de preenchimento:</strong> {escape(format_date(values.get('fill_date')))}</p>",
        "</div>",
    ]
    for section in build_report_sections(values):
        parts.append('<div class="section">')
        parts.append(f'<div class="section-title">{escape(section.title.upper())}</div>')
        for line in section.lines:
            css = "field sub" if line.indent else "field"
            parts.append(
                f'<div class="{css}"><span class="field-label">{escape(line.label)}:</span>'
                f'<span class="field-value">{escape(line.value)}</span></div>'
            )
        parts.append("</div>")
    parts.extend(["</body>", "</html>"])
    return "\n".join(parts)


def render_notification_html(values: Mapping[str, Any], *, received_at: datetime | None = None) -> str:
    received_at = received_at or datetime.now()

    def _text(name: str) -> str:
        raw = values.get(name)
        return escape(str(raw)) if raw not in (None, "", 0) else NOT_INFORMED

    return "\n".join(
        [
            "<h2>Novo Formulário Médico Recebido</h2>",
            f"<p><strong>Paciente:</strong> {_text('full_name')}</p>",
            f"<p><strong>Data de Nascimento:</strong> {escape(format_date(values.get('birth_date')))}</p>",
            f"<p><strong>Data de Preenchimento:</strong> {received_at.strftime('%d/%m/%Y %H:%M')}</p>",
            "<h3>Resumo dos Dados:</h3>",
            "<ul>",
            f"<li><strong>Idade:</strong> {_text('age')}</li>",
            f"<li><strong>Indicação:</strong> {_text('referral_source')}</li>",
            f"<li><strong>Quem indicou:</strong> {_text('referred_by')}</li>",
            "</ul>",
            "<hr>",
            "<h3>Dados Completos do Formulário:</h3>",
            render_form_html(values),
        ]
    )
