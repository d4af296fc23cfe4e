"""
Record types produced while scanning a statement.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Any, Optional


class TransactionKind(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"


@dataclass
class ExtractedFields:
    """Fields recovered from one context window. Filled in as matchers succeed."""

    date: Optional[str] = None
    amount: Optional[float] = None
    is_negative: bool = False
    ticker: Optional[str] = None
    share_count: Optional[float] = None
    unit_price: Optional[float] = None
    direction: Optional[str] = None
    time: Optional[str] = None

    def is_complete(self) -> bool:
        """A trade needs ticker, shares, unit price and direction."""
        return bool(self.ticker and self.share_count and self.unit_price and self.direction)


@dataclass
class FinancialRecord:
    """One imported trade. Ids and fingerprints are assigned by the caller."""

    date: str
    type: TransactionKind
    amount: float
    description: str
    category: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return data
