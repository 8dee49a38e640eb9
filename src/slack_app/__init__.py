"""
Slack App Module

Handles Slack delivery of injection version check reports.
"""

from .client import SlackClient
from .formatter import SlackFormatter
from .notifier import SlackNotifier

__all__ = ['SlackClient', 'SlackFormatter', 'SlackNotifier']

