"""
Slack Client Module

Thin wrapper around the Slack Web API client.
"""

import logging
from typing import Optional, Dict, Any, List

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

logger = logging.getLogger(__name__)


class SlackClient:
    """Sends messages and files to Slack."""

    def __init__(self, token: str, default_channel: str = '#istio-version-check',
                 web_client: Optional[WebClient] = None):
        """
        Initialize the Slack client.

        Args:
            token: Slack bot token
            default_channel: Channel used when none is given
            web_client: Preconfigured WebClient (optional)
        """
        self.default_channel = default_channel
        self.client = web_client or WebClient(token=token)

    def send_message(self, text: str, channel: Optional[str] = None) -> Dict[str, Any]:
        """Send a plain text message."""
        try:
            response = self.client.chat_postMessage(channel=channel or self.default_channel, text=text)
            return response.data
        except SlackApiError as e:
            logger.error(f"Error sending message: {e.response['error']}")
            raise

    def send_rich_message(self, blocks: List[Dict[str, Any]], channel: Optional[str] = None,
                          text: str = "Istio injection version check") -> Dict[str, Any]:
        """
        Send a Block Kit message.

        Args:
            blocks: Slack blocks
            channel: Channel to send to (defaults to the client's channel)
            text: Fallback text for notifications

        Returns:
            Response from Slack API
        """
        try:
            response = self.client.chat_postMessage(
                channel=channel or self.default_channel,
                text=text,
                blocks=blocks
            )
            return response.data
        except SlackApiError as e:
            logger.error(f"Error sending rich message: {e.response['error']}")
            raise

    def send_file(self, file_path: str, channel: Optional[str] = None, title: Optional[str] = None,
                  comment: Optional[str] = None) -> Dict[str, Any]:
        """Upload a file to a channel."""
        try:
            response = self.client.files_upload_v2(
                channel=channel or self.default_channel,
                file=file_path,
                title=title,
                initial_comment=comment
            )
            return response.data
        except SlackApiError as e:
            logger.error(f"Error uploading file {file_path}: {e.response['error']}")
            raise
