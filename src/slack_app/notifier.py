"""
Slack Notifier Module

Handles sending version check results to Slack with proper formatting.
"""

import json
import time
import logging
from typing import Optional, Dict, Any
from pathlib import Path

from .client import SlackClient
from .formatter import SlackFormatter
from injection_analyzer.scanner import RESULTS_FILENAME
from utils.html_report import HTMLReportGenerator

logger = logging.getLogger(__name__)


class SlackNotifier:
    """Handles sending version check results to Slack."""

    def __init__(self, client: SlackClient, report_dir: str = '/tmp'):
        """
        Initialize the Slack notifier.

        Args:
            client: SlackClient instance for API interactions
            report_dir: Directory for generated HTML reports
        """
        self.client = client
        self.formatter = SlackFormatter()
        self.report_dir = report_dir

    def send_version_report(self, results: Dict[str, Any], channel: Optional[str] = None) -> Dict[str, Any]:
        """
        Send a formatted version check report to Slack.

        Args:
            results: Version check results
            channel: Channel to send to (defaults to the client's channel)

        Returns:
            Response from Slack API
        """
        summary = self.formatter.parse_version_summary(results)
        blocks = self.formatter.create_version_blocks(summary)

        fallback_text = (
            f"🧬 Istio Injection Version Check - {summary['findings']} findings "
            f"on {summary['affected_pods']} pods"
        )

        try:
            response = self.client.send_rich_message(blocks, channel=channel, text=fallback_text)
            logger.info(f"Version report sent successfully to {channel or self.client.default_channel}")
        except Exception as e:
            logger.error(f"Error sending version report: {e}")
            raise

        # The HTML attachment is best effort
        logger.info("📊 Generating HTML report...")
        try:
            timestamp = time.strftime('%Y%m%d-%H%M%S', time.gmtime())
            html_path = Path(self.report_dir) / f"version-report-{timestamp}.html"

            HTMLReportGenerator.generate_version_report(results, str(html_path))

            self.client.send_file(
                str(html_path),
                channel=channel,
                title=f"Istio Injection Version Report - {timestamp}",
                comment="📊 Detailed HTML report - Download and open in your browser!"
            )
            logger.info(f"✅ HTML report sent to Slack: {html_path}")
        except Exception as e:
            logger.warning(f"⚠️  Failed to generate/send HTML report: {e}")

        return response

    def send_test_message(self, channel: Optional[str] = None) -> Dict[str, Any]:
        """
        Send a test message to verify Slack connection.

        Args:
            channel: Channel to send to (defaults to the client's channel)

        Returns:
            Response from Slack API
        """
        try:
            response = self.client.send_message(
                "🧪 Test message from the Istio injection version checker! 🧬",
                channel=channel
            )

            blocks = self.formatter.create_test_blocks()
            self.client.send_rich_message(blocks, channel=channel)

            logger.info(f"Test messages sent successfully to {channel or self.client.default_channel}")
            return response

        except Exception as e:
            logger.error(f"Error sending test message: {e}")
            raise

    def monitor_for_scan_output(self, output_dir: str, max_wait_time: int = 300,
                                channel: Optional[str] = None,
                                check_interval: int = 5) -> Optional[Dict[str, Any]]:
        """
        Monitor for the version check results file and send a report when available.

        Args:
            output_dir: Directory to monitor for results
            max_wait_time: Maximum time to wait for results (seconds)
            channel: Channel to send to (defaults to the client's channel)
            check_interval: Seconds between checks

        Returns:
            Response from Slack API if results were found and sent, None otherwise
        """
        results_file = Path(output_dir) / RESULTS_FILENAME

        logger.info(f"Monitoring for results at {results_file} (max wait: {max_wait_time}s)...")

        start_time = time.time()

        while time.time() - start_time < max_wait_time:
            if results_file.exists():
                logger.info(f"✅ Results found at {results_file}")

                try:
                    with open(results_file, 'r') as f:
                        results = json.load(f)
                    return self.send_version_report(results, channel)
                except Exception as e:
                    logger.error(f"Error processing results: {e}")
                    return None

            time.sleep(check_interval)

        logger.warning(f"⏱️  Timeout waiting for results after {max_wait_time}s")
        return None
