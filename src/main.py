"""
Main Entry Point

Entry point for the Istio injection version check application.
"""

import os
import sys
import logging
from app import VersionCheckApp
from utils import Config, setup_logging

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    sidecar_mode = os.getenv('SIDECAR_MODE', 'false').lower() == 'true'

    try:
        config = Config()

        setup_logging(level=config.log_level, debug=config.is_debug())

        logger.debug(f"Configuration: {config.to_dict()}")

        app = VersionCheckApp(config)

        if config.is_test_mode():
            exit_code = app.run_test_mode()
        elif sidecar_mode:
            exit_code = app.run_sidecar_mode()
        elif config.get_snapshot_file():
            exit_code = app.run_file_mode()
        else:
            exit_code = app.run_scan_mode()

        sys.exit(exit_code)

    except Exception as e:
        logger.error(f"❌ Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
