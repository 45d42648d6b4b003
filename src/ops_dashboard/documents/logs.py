"""Activity log report, printed landscape."""

from __future__ import annotations

from datetime import datetime
from functools import partial
from typing import Any, Dict, Mapping, Optional, Sequence

from .company import CompanyInfo
from .formatting import format_currency, format_date
from .i18n import ACTIVITY_TYPE_LABELS, STATUS_LABELS, lookup, translate
from .layout import esc, letterhead, page, table

LANDSCAPE_MARGIN = {"top": "15mm", "right": "10mm", "bottom": "15mm", "left": "10mm"}


def _joined(*parts: Any) -> str:
    return " / ".join(str(part) for part in parts)


def _provider_name(car: Mapping[str, Any]) -> Optional[str]:
    for key in ("provider_details", "providers"):
        provider = car.get(key)
        if isinstance(provider, Mapping) and provider.get("name"):
            return provider["name"]
    return car.get("provider")


def _price(value: Any, na: str) -> str:
    return format_currency(value) if value else na


def log_row(entry: Mapping[str, Any], language: str) -> list:
    """One table row for a ``logs`` entry; missing car or deal columns print as N/A."""
    t = partial(translate, language)
    na = t("not_available")
    car: Dict[str, Any] = entry.get("car") or {}
    deal: Dict[str, Any] = entry.get("deal") or {}

    if car:
        vehicle = _joined(
            " ".join(str(part) for part in (car.get("brand"), car.get("title")) if part),
            car.get("year") or na,
            car.get("car_number") or t("no_car_number"),
        )
        purchase = _joined(
            format_date(car.get("purchase_date"), language) or na,
            _provider_name(car) or na,
            _price(car.get("buy_price"), na),
        )
    else:
        vehicle = purchase = na

    if deal:
        sale = _joined(
            format_date(deal.get("sale_date"), language) or na,
            deal.get("customer_name") or na,
            _price(deal.get("selling_price"), na),
        )
        commission = _price(deal.get("amount"), na)
        status = lookup(STATUS_LABELS, language, deal.get("status")) or na
        deal_type = deal.get("deal_type") or na
    else:
        sale = commission = status = deal_type = na

    return [
        format_date(entry.get("created_at"), language) or na,
        lookup(ACTIVITY_TYPE_LABELS, language, entry.get("type")) or na,
        vehicle,
        purchase,
        sale,
        commission,
        status,
        deal_type,
    ]


def render_logs_html(
    entries: Sequence[Mapping[str, Any]],
    language: str,
    company: CompanyInfo,
    *,
    generated_at: Optional[datetime] = None,
) -> str:
    t = partial(translate, language)
    subtitle = f"{t('total_records')}: {len(entries)}"
    if generated_at is not None:
        subtitle = f"{t('generated_on')}: {format_date(generated_at, language)} | {subtitle}"

    if entries:
        headers = [
            (t("log_date"), False),
            (t("activity"), False),
            (t("car_details"), False),
            (t("purchase_info"), False),
            (t("sale_info"), False),
            (t("commission"), True),
            (t("deal_status"), False),
            (t("deal_type"), False),
        ]
        content = table(headers, (log_row(entry, language) for entry in entries))
    else:
        content = f"<p>{esc(t('no_records'))}</p>"

    body = letterhead(company, t("activity_logs"), subtitle) + content
    return page(t("activity_logs"), body, language)
