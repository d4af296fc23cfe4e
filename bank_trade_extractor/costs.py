"""
Cost derivation for parsed trades.

The recorded amount is the derived total (share value plus commission and
BSMV tax), not the amount printed on the statement.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from babel.numbers import format_decimal

from .models import ExtractedFields

CENT = Decimal("0.01")
COMMISSION_RATE = 0.0005
TAX_RATE = 0.000015

DIRECTION_VERBS = {
    "ALIS": "Alım",
    "SATIS": "Satış",
}


@dataclass(frozen=True)
class CostBreakdown:
    share_value: float
    commission: float
    tax: float
    total_cost: float


def derive_cost(share_count: float, unit_price: float,
                commission_rate: float = COMMISSION_RATE,
                tax_rate: float = TAX_RATE) -> CostBreakdown:
    """Compute share value, commission, tax and the total cost."""
    share_value = share_count * unit_price
    commission = share_value * commission_rate
    tax = share_value * tax_rate
    return CostBreakdown(
        share_value=share_value,
        commission=commission,
        tax=tax,
        total_cost=share_value + commission + tax,
    )


def format_amount(value: float, locale: str = "tr_TR") -> str:
    """Currency figure with locale grouping and two fixed decimals, halves rounded up."""
    rounded = Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    return format_decimal(rounded, format="#,##0.00", locale=locale)


def format_count(value: float, locale: str = "tr_TR") -> str:
    return format_decimal(value, locale=locale)


def build_description(fields: ExtractedFields, costs: CostBreakdown,
                      locale: str = "tr_TR", currency_label: str = "TL") -> str:
    """Human readable summary of a trade and its fees."""
    verb = DIRECTION_VERBS.get(fields.direction, fields.direction)
    cur = currency_label
    return (
        f"{fields.ticker} Hisse {verb} "
        f"({format_count(fields.share_count, locale)} adet x "
        f"{format_amount(fields.unit_price, locale)} {cur} = "
        f"{format_amount(costs.share_value, locale)} {cur} + "
        f"Komisyon: {format_amount(costs.commission, locale)} {cur} + "
        f"BSMV: {format_amount(costs.tax, locale)} {cur}) [{fields.time}]"
    )
