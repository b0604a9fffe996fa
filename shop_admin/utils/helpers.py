# utils/helpers.py
from datetime import date, datetime, timezone
import logging
from typing import Union, Optional

from ..constants import CURRENCY

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def fmt_money(
    v: NumberLike,
    places: int = 2,
    *,
    strict: bool = False,
    sentinel: Optional[str] = None,
) -> str:
    """
    Format a number as money with thousands separators and a fixed number of decimals.

    Behavior on parse failure:
      - By default (strict=False, sentinel=None), returns str(v).
      - If `sentinel` is provided (e.g., "N/A"), returns that sentinel instead.
      - If `strict=True`, raises ValueError on parse failures.
    """
    try:
        x = float(v)
    except Exception as e:
        _log.debug("fmt_money: failed to parse %r as float: %s", v, e)
        if strict:
            raise ValueError(f"Could not parse {v!r} as a number.") from e
        return str(sentinel) if sentinel is not None else str(v)
    return f"{x:,.{places}f}"


def fmt_mk(v: NumberLike) -> str:
    """Money with the shop currency prefix, e.g. 'MK 1,250.00'."""
    return f"{CURRENCY} {fmt_money(v, sentinel='0.00')}"


def fmt_qty(v: NumberLike) -> str:
    try:
        return f"{float(v):,.0f}"
    except (TypeError, ValueError):
        return str(v)


def fmt_date(d: Optional[datetime]) -> str:
    """'Jan 05, 2026' for a datetime, empty string for None."""
    if d is None:
        return ""
    return d.strftime("%b %d, %Y")


def parse_iso_datetime(raw) -> Optional[datetime]:
    """
    Parse a backend timestamp ('2026-01-05', '2026-01-05T00:00:00.000Z', ...)
    into an aware UTC datetime. Returns None for blank or unparsable input.
    """
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, date):
        dt = datetime(raw.year, raw.month, raw.day)
    else:
        text = str(raw or "").strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            _log.debug("parse_iso_datetime: unparsable %r", raw)
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
