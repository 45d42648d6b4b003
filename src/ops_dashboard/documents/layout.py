"""Shared page shell and markup helpers for the document templates."""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Any, Iterable, Optional, Sequence, Tuple

from .company import CompanyInfo
from .formatting import format_date
from .i18n import HTML_LANG, RTL_LANGUAGES, text_direction, translate

FONT_LINKS = {
    "he": "https://fonts.googleapis.com/css2?family=Heebo:wght@400;600;700&display=swap",
    "ae": "https://fonts.googleapis.com/css2?family=Cairo:wght@400;600;700&display=swap",
}
FONT_FAMILIES = {
    "en": "'Helvetica Neue', Arial, sans-serif",
    "he": "'Heebo', Arial, sans-serif",
    "ae": "'Cairo', Arial, sans-serif",
}

STYLES = """
* { box-sizing: border-box; }
body { margin: 0; padding: 24px; color: #1f2937; font-size: 13px; line-height: 1.5; }
header { display: flex; justify-content: space-between; align-items: flex-start;
         border-bottom: 2px solid #2563eb; padding-bottom: 12px; margin-bottom: 20px; }
header h1 { margin: 0; font-size: 22px; color: #1e3a8a; }
header .company { font-size: 12px; color: #4b5563; }
header .company strong { display: block; font-size: 16px; color: #111827; }
header img { max-height: 56px; }
section { margin-bottom: 18px; page-break-inside: avoid; }
section h2 { font-size: 15px; color: #1e3a8a; border-bottom: 1px solid #e5e7eb;
             padding-bottom: 4px; margin: 0 0 8px; }
dl { display: grid; grid-template-columns: repeat(2, 1fr); gap: 4px 24px; margin: 0; }
dl div { display: flex; gap: 8px; }
dt { font-weight: 600; color: #374151; }
dd { margin: 0; }
table { width: 100%; border-collapse: collapse; }
th, td { padding: 6px 8px; border-bottom: 1px solid #e5e7eb; text-align: start; }
th { background: #eff6ff; font-weight: 600; }
td.num, th.num { text-align: end; }
.totals { margin-top: 8px; }
.totals .grand { font-size: 16px; font-weight: 700; }
ul.terms { margin: 0; padding-inline-start: 20px; }
.signatures { display: flex; justify-content: space-between; margin-top: 48px; }
.signatures div { width: 40%; border-top: 1px solid #111827; padding-top: 6px; }
footer { margin-top: 24px; font-size: 11px; color: #6b7280; text-align: center; }
"""


def esc(value: Any) -> str:
    """HTML-escape any value; ``None`` prints as an empty string."""
    if value is None:
        return ""
    return escape(str(value), quote=True)


def field(label: str, value: Any) -> str:
    return f"<div><dt>{esc(label)}:</dt><dd>{esc(value)}</dd></div>"


def fields(pairs: Iterable[Tuple[str, Any]], *, skip_empty: bool = False) -> str:
    rows = [field(label, value) for label, value in pairs if not (skip_empty and value in (None, ""))]
    return f"<dl>{''.join(rows)}</dl>"


def section(title: str, body: str) -> str:
    return f"<section><h2>{esc(title)}</h2>{body}</section>"


def table(headers: Sequence[Tuple[str, bool]], rows: Iterable[Sequence[Any]]) -> str:
    """``headers`` are ``(label, numeric)`` pairs; numeric columns align to the end."""
    head = "".join(
        f'<th class="num">{esc(label)}</th>' if numeric else f"<th>{esc(label)}</th>"
        for label, numeric in headers
    )
    body = "".join(
        "<tr>"
        + "".join(
            f'<td class="num">{esc(cell)}</td>' if numeric else f"<td>{esc(cell)}</td>"
            for cell, (_, numeric) in zip(row, headers)
        )
        + "</tr>"
        for row in rows
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def letterhead(company: CompanyInfo, title: str, subtitle: Optional[str] = None) -> str:
    logo = f'<img src="{esc(company.logo_url)}" alt="">' if company.logo_url else ""
    details = "".join(
        f"<div>{esc(value)}</div>" for value in (company.phone, company.address) if value
    )
    sub = f"<div>{esc(subtitle)}</div>" if subtitle else ""
    return (
        "<header>"
        f'<div class="company">{logo}<strong>{esc(company.name)}</strong>{details}</div>'
        f"<div><h1>{esc(title)}</h1>{sub}</div>"
        "</header>"
    )


def page(title: str, body: str, language: str, *, generated_at: Optional[datetime] = None) -> str:
    """Wrap ``body`` in a full HTML document with direction and fonts for ``language``."""
    font_link = (
        f'<link rel="stylesheet" href="{FONT_LINKS[language]}">' if language in RTL_LANGUAGES else ""
    )
    footer = ""
    if generated_at is not None:
        footer = (
            f"<footer>{esc(translate(language, 'generated_on'))} "
            f"{esc(format_date(generated_at, language))}</footer>"
        )
    return (
        "<!DOCTYPE html>"
        f'<html lang="{HTML_LANG.get(language, "en")}" dir="{text_direction(language)}">'
        '<head><meta charset="utf-8">'
        f"<title>{esc(title)}</title>{font_link}"
        f"<style>body {{ font-family: {FONT_FAMILIES.get(language, FONT_FAMILIES['en'])}; }}"
        f"{STYLES}</style></head>"
        f"<body>{body}{footer}</body></html>"
    )
