"""Shared fixtures for the trade extractor tests."""

from __future__ import annotations

import logging
import textwrap

import pytest

from bank_trade_extractor import ExtractorConfig


def _dedent(s: str) -> str:
    return textwrap.dedent(s).lstrip("\n").rstrip()


@pytest.fixture
def config() -> ExtractorConfig:
    return ExtractorConfig()


@pytest.fixture
def quiet_logger() -> logging.Logger:
    """A logger that drops everything, for deterministic silent runs."""
    log = logging.getLogger("bank_trade_extractor.tests.quiet")
    log.addHandler(logging.NullHandler())
    log.propagate = False
    return log


@pytest.fixture
def statement_text() -> str:
    # Two trades: an inline buy and a sell whose amount is on the next line.
    return _dedent(
        """
        VAKIFBANK HESAP HAREKETLERI
        Sayfa 1

        2025.07.01 valörlü GZ: -1.875,94 TL
        Hisse senedi işlemi
        10:15:30 ABCDE 150 ADET
        x12,50 TL ALIS
        Bakiye 10.000,00 TL
        2025.07.03 valörlü GZ:
        2.400,00 TL
        14:02:11 XYZW 1.000 ADET
        x2,40 TL SATIS
        """
    )
