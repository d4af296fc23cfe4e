import pytest

from bank_trade_extractor.models import FinancialRecord, TransactionKind
from bank_trade_extractor.validators import DataValidator, records_to_dataframe


def _record(date, kind, amount, ticker="ABCDE"):
    return FinancialRecord(
        date=date,
        type=kind,
        amount=amount,
        description=f"{ticker} Hisse Alım (1 adet x 1,00 TL)",
        category="Hisse Senetleri",
        source="test",
    )


@pytest.fixture
def frame():
    return records_to_dataframe([
        _record("2025-07-01", TransactionKind.EXPENSE, 100.0),
        _record("2025-07-15", TransactionKind.INCOME, 40.0, ticker="XYZW"),
        _record("2025-08-02", TransactionKind.EXPENSE, 10.0),
        _record("2025-08-02", TransactionKind.EXPENSE, 10.0),
    ])


def test_records_to_dataframe_adds_ticker(frame):
    assert frame["ticker"].tolist() == ["ABCDE", "XYZW", "ABCDE", "ABCDE"]
    assert frame["type"].tolist()[:2] == ["expense", "income"]


def test_validate_amounts(frame, config):
    results = DataValidator(config).validate_amounts(frame)
    assert results["amount_stats"]["expense_count"] == 3
    assert results["amount_stats"]["total_expense"] == 120.0
    assert results["amount_stats"]["net_amount"] == -80.0
    assert results["non_positive_amounts"] == 0


def test_validate_dates(frame, config):
    results = DataValidator(config).validate_dates(frame)
    assert results["date_range"] == {"start": "2025-07-01", "end": "2025-08-02", "span_days": 32}
    assert results["invalid_dates"] == 0


def test_validate_duplicates(frame, config):
    assert DataValidator(config).validate_duplicates(frame)["duplicate_count"] == 1


def test_generate_statistics(frame, config):
    stats = DataValidator(config).generate_statistics(frame)
    assert stats["monthly_summary"]["2025-07"] == {"trade_count": 2, "total_amount": 140.0}
    assert stats["ticker_summary"]["ABCDE"]["trade_count"] == 3


def test_summary_warns_on_duplicates(frame, config):
    validator = DataValidator(config)
    results = {
        "total_transactions": len(frame),
        "checks": {
            "date_validation": validator.validate_dates(frame),
            "amount_validation": validator.validate_amounts(frame),
            "duplicate_validation": validator.validate_duplicates(frame),
        },
    }
    summary = validator.generate_validation_summary(results)
    assert summary["overall_status"] == "WARNING"
    assert summary["warnings"] == 1
