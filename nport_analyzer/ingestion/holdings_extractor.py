"""
NPORT-P Holdings Extractor

Walks the generic tree of an NPORT-P filing (see xml_tree.parse_xml) and
returns the holdings whose name, issuer or ticker contain a search term.

NPORT-P structure:
- <edgarSubmission>
  - <formData>
    - <genInfo> - contains <repPdDate>
    - <invstOrSecs>
      - <invstOrSec> (repeated) - one per position
        - <name>, <title>, <cusip>, <balance>, <valUSD>, <curCd>
        - <identifiers><ticker value="..."/></identifiers>
        - <currencyConditional curCd="..." exchangeRt="..."/>

Field names vary by filer and by case, so every logical field is looked up
through an ordered list of candidate key-paths (FIELD_PATHS).
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from ..models import HoldingRecord
from .xml_tree import iter_entries, resolve, scalar_text

logger = logging.getLogger(__name__)

# Candidate key-paths per logical field, in precedence order
FIELD_PATHS: Dict[str, Tuple[str, ...]] = {
    "form_data": (
        "edgarSubmission.formData",
        "edgarSubmission.formdata",
        "edgarsubmission.formData",
        "edgarsubmission.formdata",
    ),
    "gen_info": ("genInfo", "geninfo"),
    "report_date": ("repPdDate", "reppddate", "reportDate"),
    "investments": (
        "invstOrSecs.invstOrSec",
        "invstorsecs.invstorsec",
        "investments.investment",
    ),
    "name": ("name", "Name", "issuerName"),
    "issuer": ("issuer.name", "issuer.Name", "issuerName"),
    "ticker": ("identifiers.ticker", "ticker", "Ticker"),
    "title": ("title", "Title", "desc", "description"),
    "balance": ("balance", "Balance", "shares", "Shares"),
    "market_value": ("valUSD", "valusd", "marketValue", "MarketValue"),
    "currency": (
        "currencyconditional.curCd",
        "currencyconditional.curcd",
        "curCd",
        "curcd",
        "currencyCode",
        "currency",
    ),
    "exchange_rate": (
        "currencyconditional.exchangeRt",
        "currencyconditional.exchangert",
        "exchangeRt",
        "exchangert",
        "exchangeRate",
        "fxRate",
        "fxrate",
    ),
    "cusip": ("identifiers.cusip", "cusip", "CUSIP"),
}


def _lookup(node: Any, field: str) -> Optional[Any]:
    return resolve(node, *FIELD_PATHS[field])


def _text(node: Any, field: str) -> str:
    return scalar_text(_lookup(node, field))


def _to_float(value: Any, default: float) -> float:
    """Parse a resolved value as a finite float, falling back to default."""
    if value is None:
        return default
    try:
        number = float(scalar_text(value).strip())
    except ValueError:
        return default
    return number if math.isfinite(number) else default


def compute_prices(
    market_value: float,
    shares: float,
    currency: str,
    exchange_rate: float
) -> Tuple[float, float]:
    """
    Derive per-share prices for a position.

    Returns:
        (price_in_usd, price_per_share). price_per_share is price_in_usd
        multiplied by the exchange rate for non-USD positions with a
        reported rate other than 1, otherwise equal to price_in_usd.
    """
    price_in_usd = market_value / shares
    if currency != "USD" and exchange_rate > 0 and exchange_rate != 1:
        return price_in_usd, price_in_usd * exchange_rate
    return price_in_usd, price_in_usd


def extract_holdings(tree: Dict[str, Any], search_term: str) -> List[HoldingRecord]:
    """
    Extract holdings matching a search term from a parsed NPORT-P filing.

    Args:
        tree: Generic tree from xml_tree.parse_xml
        search_term: Case-insensitive substring matched against name,
            issuer and ticker (title is not searched)

    Returns:
        Matching holdings in document order. Positions with a zero or
        negative balance or market value are dropped. Never raises;
        on an unexpected error the holdings found so far are returned.

    Example:
        holdings = extract_holdings(parse_xml(xml), "apple")
    """
    holdings: List[HoldingRecord] = []

    try:
        form_data = _lookup(tree, "form_data")
        if not form_data:
            logger.debug("No formData container found")
            return holdings

        gen_info = _lookup(form_data, "gen_info") or {}
        report_date = _text(gen_info, "report_date")

        investments = _lookup(form_data, "investments")
        if not investments:
            logger.debug("No investment entries found")
            return holdings

        search_lower = search_term.lower()

        for inv in iter_entries(investments):
            name = _text(inv, "name")
            issuer = _text(inv, "issuer")
            ticker = _text(inv, "ticker")
            title = _text(inv, "title")

            matches = (
                search_lower in name.lower()
                or search_lower in issuer.lower()
                or search_lower in ticker.lower()
            )
            if not matches:
                continue

            balance = _to_float(_lookup(inv, "balance"), 0.0)
            market_value = _to_float(_lookup(inv, "market_value"), 0.0)
            if not (balance > 0 and market_value > 0):
                continue

            currency = _text(inv, "currency").strip().upper() or "USD"
            exchange_rate = _to_float(_lookup(inv, "exchange_rate"), 1.0)

            price_in_usd, price_per_share = compute_prices(
                market_value, balance, currency, exchange_rate
            )

            holdings.append(HoldingRecord(
                name=name,
                issuer=issuer,
                title=title,
                shares=balance,
                market_value=market_value,
                price_per_share=price_per_share,
                price_in_usd=price_in_usd,
                currency=currency,
                exchange_rate=exchange_rate,
                report_date=report_date,
                cusip=_text(inv, "cusip"),
                ticker=ticker
            ))

    except Exception as e:
        logger.error(f"Error extracting holdings: {e}")

    return holdings
