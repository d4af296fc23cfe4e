"""
Parsers module for brokerage trade blocks.
Contains the field matchers and the per-window trade parser.
"""

import re
import logging
from typing import List, NamedTuple, Optional, Sequence

from .costs import build_description, derive_cost
from .models import ExtractedFields, FinancialRecord, TransactionKind

DATE_PATTERN = re.compile(r'(\d{4})\.(\d{2})\.(\d{2})', re.ASCII)
STOCK_PATTERN = re.compile(r'(\d{2}:\d{2}:\d{2})\s+([A-Z]{4,6})\s+([\d,.]+)\s+ADET', re.ASCII)
PRICE_PATTERN = re.compile(r'x([\d,.]+)\s+TL\s+(ALIS|SATIS)', re.ASCII)

BUY = "ALIS"


class AmountMatch(NamedTuple):
    value: float
    is_negative: bool


class StockMatch(NamedTuple):
    time: str
    ticker: str
    share_count: float


class PriceMatch(NamedTuple):
    unit_price: float
    direction: str


def parse_grouped_number(text: str) -> float:
    """Parse '1.234,56' style numbers: drop grouping dots, decimal comma to point."""
    return float(text.replace('.', '').replace(',', '.', 1))


def parse_decimal_comma(text: str) -> float:
    """Parse '12,50' style numbers. Grouping dots are not stripped."""
    return float(text.replace(',', '.', 1))


def match_date(line: str) -> Optional[str]:
    """Return the first YYYY.MM.DD date in the line as YYYY-MM-DD."""
    m = DATE_PATTERN.search(line)
    if not m:
        return None
    return f"{m.group(1)}-{m.group(2)}-{m.group(3)}"


def match_amount(window: Sequence[str], marker: str = "GZ:", currency: str = "TL") -> Optional[AmountMatch]:
    """Find the stated amount, either after the marker or on the line following it."""
    trailing = re.compile(re.escape(marker) + r'\s*$', re.ASCII)
    inline = re.compile(re.escape(marker) + r'\s*(-?[\d,.]+)\s*' + re.escape(currency), re.ASCII)
    value_only = re.compile(r'(-?[\d,.]+)\s*' + re.escape(currency), re.ASCII)

    for i, line in enumerate(window):
        if trailing.search(line):
            next_line = window[i + 1] if i + 1 < len(window) else None
            m = value_only.search(next_line) if next_line is not None else None
        else:
            m = inline.search(line)

        if m:
            raw = m.group(1)
            return AmountMatch(abs(parse_grouped_number(raw)), '-' in raw)
    return None


def match_stock(line: str) -> Optional[StockMatch]:
    """Match 'HH:MM:SS TICKER <count> ADET'."""
    m = STOCK_PATTERN.search(line)
    if not m:
        return None
    return StockMatch(m.group(1), m.group(2), parse_grouped_number(m.group(3)))


def match_price(line: str) -> Optional[PriceMatch]:
    """Match 'x<price> TL ALIS|SATIS'."""
    m = PRICE_PATTERN.search(line)
    if not m:
        return None
    return PriceMatch(parse_decimal_comma(m.group(1)), m.group(2))


def transaction_kind(direction: str, is_negative: bool) -> TransactionKind:
    """Buys and negative stated amounts are expenses, everything else income."""
    if direction == BUY or is_negative:
        return TransactionKind.EXPENSE
    return TransactionKind.INCOME


class TradeParser:
    """Parser for one context window of a trade block."""

    def __init__(self, config, logger: logging.Logger = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def parse_fields(self, window: List[str]) -> Optional[ExtractedFields]:
        """Run the matchers over a window. Returns None when the window is unusable."""
        date = match_date(window[0])
        if not date:
            self.logger.debug(f"No date on anchor line: {window[0]!r}")
            return None

        amount = match_amount(window, self.config.amount_marker, self.config.currency_label)
        if not amount or not amount.value:
            self.logger.debug(f"No amount found for {date}")
            return None

        fields = ExtractedFields(date=date, amount=amount.value, is_negative=amount.is_negative)

        # Later matches overwrite earlier ones
        for line in window:
            stock = match_stock(line)
            if stock:
                fields.time = stock.time
                fields.ticker = stock.ticker
                fields.share_count = stock.share_count

            price = match_price(line)
            if price:
                fields.unit_price = price.unit_price
                fields.direction = price.direction

        if not fields.is_complete():
            self.logger.info(
                f"❌ Incomplete data: ticker={fields.ticker} shares={fields.share_count} "
                f"price={fields.unit_price} direction={fields.direction}"
            )
            return None

        return fields

    def build_record(self, fields: ExtractedFields) -> FinancialRecord:
        """Derive costs and build the output record."""
        costs = derive_cost(
            fields.share_count, fields.unit_price,
            self.config.commission_rate, self.config.tax_rate,
        )
        description = build_description(fields, costs, self.config.locale, self.config.currency_label)

        self.logger.debug(
            f"💰 {fields.ticker}: value={costs.share_value:.2f} commission={costs.commission:.2f} "
            f"tax={costs.tax:.4f} total={costs.total_cost:.2f} stated={fields.amount:.2f}"
        )

        return FinancialRecord(
            date=fields.date,
            type=transaction_kind(fields.direction, fields.is_negative),
            amount=costs.total_cost,
            description=description,
            category=self.config.category,
            source=self.config.source,
        )

    def parse_context(self, window: List[str]) -> Optional[FinancialRecord]:
        """Parse one window into a record; any failure skips the window."""
        try:
            fields = self.parse_fields(window)
            if fields is None:
                return None
            return self.build_record(fields)
        except Exception as e:
            self.logger.debug(f"Trade window failed: {e}")
            return None
