"""
Main Application Module

Main application class that orchestrates the Istio injection version check.
"""

import os
import logging
from typing import Any, Dict, Optional

from slack_app import SlackClient, SlackNotifier
from injection_analyzer import ClusterScanner, check_snapshot, load_snapshot_file, save_results
from injection_analyzer.scanner import RESULTS_FILENAME
from utils import Config

logger = logging.getLogger(__name__)


class VersionCheckApp:
    """Main application class for the Istio injection version check."""

    def __init__(self, config: Optional[Config] = None, scanner: Optional[ClusterScanner] = None,
                 notifier: Optional[SlackNotifier] = None):
        """
        Initialize the application.

        Args:
            config: Configuration instance (optional)
            scanner: Cluster scanner (optional, created on first live scan)
            notifier: Slack notifier (optional, created from config when Slack is enabled)
        """
        self.config = config or Config()

        if not self.config.validate():
            raise ValueError("Invalid configuration. SLACK_BOT_TOKEN is required when Slack is enabled.")

        self.scanner = scanner
        self.slack_notifier = notifier
        if self.slack_notifier is None and self.config.is_slack_enabled():
            slack_client = SlackClient(self.config.get_slack_token(), self.config.get_slack_channel())
            self.slack_notifier = SlackNotifier(slack_client)

        logger.info("Istio injection version check app initialized successfully")

    def _deliver(self, results: Dict[str, Any]) -> None:
        """Save results and send them to Slack when enabled."""
        output_dir = self.config.get_output_dir()
        os.makedirs(output_dir, exist_ok=True)
        save_results(results, os.path.join(output_dir, RESULTS_FILENAME))

        summary = results['summary']
        logger.info(
            f"Status {results['status']}: {summary['findings']} findings on "
            f"{summary['affected_pods']} pods, injector versions {summary['injector_versions']}"
        )
        for message in results['messages']:
            logger.warning(f"[{message['code']}] ({message['origin']}) {message['message']}")

        if self.slack_notifier:
            self.slack_notifier.send_version_report(results, self.config.get_slack_channel())

    def run_scan_mode(self) -> int:
        """
        Run in scan mode (snapshot the live cluster, check, and report).

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        logger.info("🧬 Starting Istio injection version check...")

        try:
            if self.scanner is None:
                self.scanner = ClusterScanner()

            results = self.scanner.scan()
            self._deliver(results)

            logger.info("✅ Version check completed")
            return 0

        except Exception as e:
            logger.error(f"❌ Error in scan mode: {e}")
            return 1

    def run_file_mode(self, snapshot_file: Optional[str] = None) -> int:
        """
        Run against a manifest file instead of a live cluster.

        Args:
            snapshot_file: Manifest file (defaults to the configured snapshot file)

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        snapshot_file = snapshot_file or self.config.get_snapshot_file()
        logger.info(f"🧬 Checking snapshot file {snapshot_file}...")

        try:
            snapshot = load_snapshot_file(snapshot_file)
            results = check_snapshot(snapshot)
            self._deliver(results)

            logger.info("✅ Version check completed")
            return 0

        except Exception as e:
            logger.error(f"❌ Error in file mode: {e}")
            return 1

    def run_sidecar_mode(self) -> int:
        """
        Run in sidecar mode (wait for results written by the scan job and send them).

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        logger.info("🧬 Starting Istio injection version check sidecar container")
        logger.info(f"📁 Monitoring directory: {self.config.get_output_dir()}")
        logger.info(f"📢 Target channel: {self.config.get_slack_channel()}")

        if not self.slack_notifier:
            logger.error("❌ Sidecar mode requires Slack to be enabled")
            return 1

        try:
            success = self.slack_notifier.monitor_for_scan_output(
                self.config.get_output_dir(),
                self.config.get_max_wait_time(),
                self.config.get_slack_channel()
            )

            if success:
                logger.info("✅ Version check results sent successfully")
                return 0
            else:
                logger.error("❌ Failed to send version check results")
                return 1

        except Exception as e:
            logger.error(f"❌ Error in sidecar mode: {e}")
            return 1

    def run_test_mode(self) -> int:
        """
        Run in test mode (send test message to Slack).

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        logger.info("🧪 Running in test mode...")

        if not self.slack_notifier:
            logger.error("❌ Test mode requires Slack to be enabled")
            return 1

        try:
            self.slack_notifier.send_test_message(self.config.get_slack_channel())
            logger.info("✅ Test message sent successfully")
            return 0

        except Exception as e:
            logger.error(f"❌ Error in test mode: {e}")
            return 1
