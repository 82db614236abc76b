"""seogen - SEO content generation dashboard backend

Main entry point for the seogen application.
"""

import argparse
import logging
import os
import sys

import uvicorn

from seogen.api import app, state
from seogen.audit_log import AuditLogWriter
from seogen.config import load_config
from seogen.errors import AuditLogError


def configure_logging(log_file: str):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file, encoding='utf-8')
        ]
    )


logger = logging.getLogger(__name__)


def serve(config) -> int:
    """Run the API server until interrupted"""
    state.configure(config)
    logger.info(f"Server is running on http://{config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    return 0


def check_sheets(config) -> int:
    """Append a probe row to the audit sheet"""
    writer = AuditLogWriter(
        config.google_sheet_id,
        config.google_service_account_path,
        sheet_range=config.google_sheet_range,
    )
    try:
        writer.check_connection()
    except AuditLogError as e:
        logger.error(f"Google Sheets check failed: {e}")
        return 1
    finally:
        writer.close()

    logger.info("Successfully wrote to Google Sheet")
    return 0


def main(argv=None):
    """Main execution flow"""
    parser = argparse.ArgumentParser(description="SEO content generator backend")
    parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=["serve", "check-sheets"],
        help="serve the API (default) or write a test row to the audit sheet",
    )
    args = parser.parse_args(argv)

    configure_logging(os.getenv("LOG_FILE", "seogen.log"))

    try:
        config = load_config()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.command == "check-sheets":
        return check_sheets(config)
    return serve(config)


if __name__ == "__main__":
    sys.exit(main())
