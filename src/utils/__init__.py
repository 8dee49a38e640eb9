"""
Utilities Module

Common utilities for the version check application.
"""

from .config import Config
from .logger import setup_logging, get_logger
from .html_report import HTMLReportGenerator

__all__ = ['Config', 'setup_logging', 'get_logger', 'HTMLReportGenerator']
