"""
Validators module for data validation and quality checks.
"""

import logging
import pandas as pd
from datetime import datetime
from typing import Dict, Any, Iterable

from .models import FinancialRecord, TransactionKind

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ["date", "type", "amount", "description", "category", "source"]


def records_to_dataframe(records: Iterable[FinancialRecord]) -> pd.DataFrame:
    """Build a DataFrame of records with a derived ticker column."""
    df = pd.DataFrame([record.to_dict() for record in records], columns=RECORD_COLUMNS)
    df["ticker"] = df["description"].str.split().str[0]
    return df


class DataValidator:
    """Data validation and quality checking."""

    def __init__(self, config):
        self.config = config

    def validate_data_integrity(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Validate data integrity."""
        results = {
            "missing_values": {},
            "data_types": {},
            "column_count": len(df.columns),
            "row_count": len(df)
        }

        for col in df.columns:
            missing_count = int(df[col].isna().sum())
            if missing_count > 0:
                results["missing_values"][col] = missing_count

        for col in df.columns:
            results["data_types"][col] = str(df[col].dtype)

        return results

    def validate_dates(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Validate trade dates."""
        results = {
            "date_range": {},
            "future_dates": [],
            "invalid_dates": 0
        }

        dates = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")

        future_dates = dates[dates > datetime.now()]
        if len(future_dates) > 0:
            results["future_dates"] = future_dates.dt.strftime('%Y-%m-%d').tolist()

        results["invalid_dates"] = int(dates.isna().sum())

        valid = dates.dropna()
        if len(valid) > 0:
            results["date_range"]["start"] = valid.min().strftime('%Y-%m-%d')
            results["date_range"]["end"] = valid.max().strftime('%Y-%m-%d')
            results["date_range"]["span_days"] = (valid.max() - valid.min()).days

        return results

    def validate_amounts(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Validate derived trade amounts."""
        results = {
            "amount_stats": {},
            "amount_range": {},
            "non_positive_amounts": 0
        }

        amounts = df["amount"]
        expenses = amounts[df["type"] == TransactionKind.EXPENSE.value]
        incomes = amounts[df["type"] == TransactionKind.INCOME.value]

        results["amount_stats"]["expense_count"] = len(expenses)
        results["amount_stats"]["income_count"] = len(incomes)
        results["amount_stats"]["total_expense"] = round(float(expenses.sum()), 2)
        results["amount_stats"]["total_income"] = round(float(incomes.sum()), 2)
        results["amount_stats"]["net_amount"] = round(float(incomes.sum() - expenses.sum()), 2)

        if len(amounts) > 0:
            results["amount_range"]["min"] = round(float(amounts.min()), 2)
            results["amount_range"]["max"] = round(float(amounts.max()), 2)
            results["amount_range"]["mean"] = round(float(amounts.mean()), 2)

        results["non_positive_amounts"] = int((amounts <= 0).sum())

        return results

    def validate_duplicates(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Flag rows that look identical; the importer deduplicates them."""
        duplicated = df[df.duplicated(subset=["date", "amount", "description"], keep="first")]
        return {
            "duplicate_count": len(duplicated),
            "duplicates": duplicated[["date", "description"]].to_dict('records')
        }

    def generate_statistics(self, df: pd.DataFrame) -> Dict[str, Any]:
        """Generate statistical analysis."""
        results = {
            "monthly_summary": {},
            "ticker_summary": {}
        }

        if len(df) == 0:
            return results

        dates = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
        monthly = df.groupby(dates.dt.to_period('M'))["amount"].agg(['count', 'sum'])
        for month, row in monthly.iterrows():
            results["monthly_summary"][str(month)] = {
                "trade_count": int(row["count"]),
                "total_amount": round(float(row["sum"]), 2)
            }

        tickers = df.groupby("ticker")["amount"].agg(['count', 'sum'])
        for ticker, row in tickers.iterrows():
            results["ticker_summary"][ticker] = {
                "trade_count": int(row["count"]),
                "total_amount": round(float(row["sum"]), 2)
            }

        return results

    def generate_validation_summary(self, validation_results: Dict[str, Any]) -> Dict[str, Any]:
        """Generate validation summary."""
        summary = {
            "overall_status": "PASS",
            "total_issues": 0,
            "warnings": 0,
            "recommendations": []
        }

        checks = validation_results["checks"]

        dates = checks.get("date_validation", {})
        if dates.get("invalid_dates"):
            summary["total_issues"] += dates["invalid_dates"]
        if dates.get("future_dates"):
            summary["warnings"] += len(dates["future_dates"])
            summary["recommendations"].append("Future-dated trades found - check the statement period")

        amounts = checks.get("amount_validation", {})
        if amounts.get("non_positive_amounts"):
            summary["total_issues"] += amounts["non_positive_amounts"]

        duplicates = checks.get("duplicate_validation", {})
        if duplicates.get("duplicate_count"):
            summary["warnings"] += duplicates["duplicate_count"]
            summary["recommendations"].append("Repeated trades found - they will be deduplicated on import")

        if validation_results["total_transactions"] == 0:
            summary["recommendations"].append("No trades found - verify the statement contains trade blocks")

        if summary["total_issues"] > 0:
            summary["overall_status"] = "FAIL"
        elif summary["warnings"] > 0:
            summary["overall_status"] = "WARNING"

        return summary
