"""
Bank Trade Extractor Package

Extracts stock trade records from bank statement PDF exports.
"""

from .config import ExtractorConfig
from .extractor import TradeStatementExtractor, parse_pdf_buffer, parse_text
from .models import ExtractedFields, FinancialRecord, TransactionKind
from .text_extractor import ExtractionError

__version__ = "1.0.0"
__all__ = [
    "ExtractionError",
    "ExtractedFields",
    "ExtractorConfig",
    "FinancialRecord",
    "TradeStatementExtractor",
    "TransactionKind",
    "parse_pdf_buffer",
    "parse_text",
]
