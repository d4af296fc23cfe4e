#!/usr/bin/env python3
"""
Main script for the Bank Trade Extractor.
Simple entry point to use the modular extractor.
"""

import sys
import logging
from bank_trade_extractor import ExtractionError, ExtractorConfig, TradeStatementExtractor


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def main():
    """Main function to run the bank trade extractor."""
    setup_logging()
    logger = logging.getLogger(__name__)

    config = ExtractorConfig("config.json")
    extractor = TradeStatementExtractor(config)

    if len(sys.argv) > 1:
        # Process specific PDF file
        pdf_path = sys.argv[1]
        logger.info(f"Processing single file: {pdf_path}")
        try:
            result = extractor.extract_to_csv(pdf_path)
        except ExtractionError as e:
            logger.error(f"❌ Failed to process PDF: {e}")
            return 1
        if result:
            logger.info(f"✅ Successfully processed: {result}")
        else:
            logger.warning("No trades found")
    else:
        # Process all PDFs in data directory
        logger.info("Processing all PDFs in data directory")
        extractor.process_all_pdfs()
    return 0


if __name__ == "__main__":
    sys.exit(main())
