"""
Injection Analyzer Module

Detects version skew between the Istio sidecar injector and the proxies
it has injected into running pods.
"""

from .analyzer import AnalysisContext, Analyzer, VersionAnalyzer, run_analyzers
from .messages import Level, Message, new_istio_proxy_version_mismatch
from .resources import Snapshot
from .scanner import ClusterScanner, check_snapshot, load_snapshot_file, save_results

__all__ = [
    'AnalysisContext',
    'Analyzer',
    'VersionAnalyzer',
    'run_analyzers',
    'Level',
    'Message',
    'new_istio_proxy_version_mismatch',
    'Snapshot',
    'ClusterScanner',
    'check_snapshot',
    'load_snapshot_file',
    'save_results',
]
