"""
Main extractor module that orchestrates all components.
"""

import os
import json
import logging
from datetime import datetime
from typing import Dict, List, Any

from .config import ExtractorConfig
from .models import FinancialRecord
from .parsers import TradeParser
from .text_extractor import ExtractionError, get_text_extractor
from .validators import DataValidator, records_to_dataframe
from .windows import iter_context_windows, split_lines

ERROR_PREFIX = "PDF dosyası işlenirken hata oluştu: "


class TradeStatementExtractor:
    """Extracts stock trade records from bank statement PDFs."""

    def __init__(self, config: ExtractorConfig = None, text_extractor=None,
                 logger: logging.Logger = None):
        """Initialize the extractor with configuration and components."""
        self.config = config or ExtractorConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.text_extractor = text_extractor or get_text_extractor(self.config, self.logger)
        self.parser = TradeParser(self.config, self.logger)
        self.validator = DataValidator(self.config)

    def extract_records_from_text(self, text: str) -> List[FinancialRecord]:
        """Parse every anchored trade block in the extracted text."""
        lines = split_lines(text)
        self.logger.info(f"📊 Total lines: {len(lines)}")

        records = []
        windows = 0
        for window in iter_context_windows(lines, self.config.anchor, self.config.terminators,
                                           self.config.max_context_lines):
            windows += 1
            self.logger.debug(f"🎯 Trade block: {window[0]!r} ({len(window)} lines)")
            record = self.parser.parse_context(window)
            if record:
                records.append(record)
                self.logger.debug(f"✅ Trade parsed: {record.type.value} - {record.amount:.2f} - {record.description}")

        self.logger.info(f"🎯 Trade blocks found: {windows}, records: {len(records)}")
        return records

    def parse_pdf_buffer(self, buffer: bytes) -> List[FinancialRecord]:
        """Extract trade records from a PDF buffer.

        Text extraction failures abort the whole call with a single
        ExtractionError; malformed trade blocks are skipped.
        """
        self.logger.info(f"📊 PDF parsing started, buffer size: {len(buffer)}")
        try:
            text = self.text_extractor.extract(buffer)
        except (ExtractionError, OSError, UnicodeDecodeError) as e:
            self.logger.error(f"❌ PDF text extraction failed: {e}")
            raise ExtractionError(ERROR_PREFIX + str(e)) from e

        self.logger.info(f"📝 PDF text extracted, length: {len(text)}")
        return self.extract_records_from_text(text)

    def parse_pdf_file(self, pdf_path: str) -> List[FinancialRecord]:
        """Read a PDF file and extract its trade records."""
        try:
            with open(pdf_path, 'rb') as f:
                buffer = f.read()
        except OSError as e:
            self.logger.error(f"❌ Could not read {pdf_path}: {e}")
            raise ExtractionError(ERROR_PREFIX + str(e)) from e
        return self.parse_pdf_buffer(buffer)

    def extract_to_csv(self, pdf_path: str, output_dir: str = "output") -> str:
        """Extract trades from a PDF into a CSV file plus a validation report.

        Returns the CSV path, or an empty string when no trades were found.
        """
        os.makedirs(output_dir, exist_ok=True)

        base_name = os.path.splitext(os.path.basename(pdf_path))[0]
        final_csv = os.path.join(output_dir, f"{base_name}_trades.csv")
        validation_report = os.path.join(output_dir, f"{base_name}_validation_report.txt")

        self.logger.info(f"🔄 Extracting trades from {pdf_path}")
        records = self.parse_pdf_file(pdf_path)

        if not records:
            self.logger.warning("No trades found in PDF")
            return ""

        df = records_to_dataframe(records)
        validation_results = self._apply_validation(df, base_name)

        df.drop(columns=["ticker"]).to_csv(final_csv, index=False)
        self._save_validation_report(validation_results, validation_report)

        self.logger.info(f"✅ Extracted {len(df)} trades")
        self.logger.info(f"💾 Saved to: {final_csv}")
        self.logger.info(f"📋 Validation report: {validation_report}")
        return final_csv

    def _apply_validation(self, df, file_name: str) -> Dict[str, Any]:
        """Apply validation checks."""
        validation_results = {
            "file_name": file_name,
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "total_transactions": len(df),
            "checks": {},
            "summary": {}
        }

        validation_results["checks"]["data_integrity"] = self.validator.validate_data_integrity(df)
        validation_results["checks"]["date_validation"] = self.validator.validate_dates(df)
        validation_results["checks"]["amount_validation"] = self.validator.validate_amounts(df)
        validation_results["checks"]["duplicate_validation"] = self.validator.validate_duplicates(df)
        validation_results["checks"]["statistics"] = self.validator.generate_statistics(df)

        validation_results["summary"] = self.validator.generate_validation_summary(validation_results)
        return validation_results

    def _save_validation_report(self, validation_results: Dict[str, Any], report_path: str):
        """Save detailed validation report."""
        with open(report_path, 'w', encoding='utf-8') as f:
            f.write("=" * 80 + "\n")
            f.write("TRADE STATEMENT VALIDATION REPORT\n")
            f.write("=" * 80 + "\n\n")

            f.write(f"File: {validation_results['file_name']}\n")
            f.write(f"Generated: {validation_results['timestamp']}\n")
            f.write(f"Total Trades: {validation_results['total_transactions']}\n")
            f.write(f"Overall Status: {validation_results['summary']['overall_status']}\n\n")

            f.write("SUMMARY\n")
            f.write("-" * 40 + "\n")
            f.write(f"Total Issues: {validation_results['summary']['total_issues']}\n")
            f.write(f"Warnings: {validation_results['summary']['warnings']}\n\n")

            f.write("DETAILED RESULTS\n")
            f.write("-" * 40 + "\n")

            for check_name, check_results in validation_results["checks"].items():
                f.write(f"\n{check_name.upper()}:\n")
                f.write("-" * 20 + "\n")
                f.write(json.dumps(check_results, indent=2, default=str, ensure_ascii=False))
                f.write("\n")

            if validation_results["summary"]["recommendations"]:
                f.write("\nRECOMMENDATIONS\n")
                f.write("-" * 40 + "\n")
                for rec in validation_results["summary"]["recommendations"]:
                    f.write(f"• {rec}\n")

    def process_all_pdfs(self, data_dir: str = "data", output_dir: str = "output") -> List[str]:
        """Process all PDFs in the data directory."""
        if not os.path.exists(data_dir):
            self.logger.error(f"Data directory '{data_dir}' not found!")
            return []

        pdf_files = sorted(f for f in os.listdir(data_dir) if f.lower().endswith('.pdf'))

        if not pdf_files:
            self.logger.warning(f"No PDF files found in '{data_dir}'")
            return []

        self.logger.info(f"🚀 Found {len(pdf_files)} PDF files to process")

        results = []
        for pdf_file in pdf_files:
            pdf_path = os.path.join(data_dir, pdf_file)
            self.logger.info(f"📄 Processing: {pdf_file}")
            try:
                result = self.extract_to_csv(pdf_path, output_dir)
            except ExtractionError as e:
                self.logger.error(f"Error processing {pdf_file}: {e}")
                continue
            if result:
                results.append(result)

        self.logger.info(f"🎉 Successfully processed {len(results)} PDF files!")
        self.logger.info(f"📁 All results saved in: {output_dir}")
        return results


def parse_pdf_buffer(buffer: bytes, config: ExtractorConfig = None,
                     logger: logging.Logger = None) -> List[FinancialRecord]:
    """Extract trade records from a PDF buffer with a one-off extractor."""
    return TradeStatementExtractor(config, logger=logger).parse_pdf_buffer(buffer)


def parse_text(text: str, config: ExtractorConfig = None,
               logger: logging.Logger = None) -> List[FinancialRecord]:
    """Extract trade records from already extracted statement text."""
    return TradeStatementExtractor(config, logger=logger).extract_records_from_text(text)
