"""
Tests for VersionCheckApp run modes and the main entry point.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import main
from app import VersionCheckApp
from injection_analyzer import check_snapshot
from injection_analyzer.scanner import RESULTS_FILENAME

SNAPSHOT_YAML = """\
apiVersion: v1
kind: Namespace
metadata:
  name: shop
  labels:
    istio-injection: enabled
---
apiVersion: v1
kind: Pod
metadata:
  name: injector
  namespace: istio-system
  labels:
    app: sidecarInjectorWebhook
spec:
  containers:
    - name: sidecar-injector-webhook
      image: istio/sidecar_injector:1.5.0
---
apiVersion: v1
kind: Pod
metadata:
  name: cart
  namespace: shop
spec:
  containers:
    - name: istio-proxy
      image: istio/proxyv2:1.4.0
"""


def _config(tmp_path: Path, slack_enabled=False, snapshot_file=None):
    config = MagicMock()
    config.validate.return_value = True
    config.is_slack_enabled.return_value = slack_enabled
    config.get_slack_token.return_value = 'xoxb-test'
    config.get_slack_channel.return_value = '#mesh'
    config.get_output_dir.return_value = str(tmp_path / 'out')
    config.get_max_wait_time.return_value = 0
    config.get_snapshot_file.return_value = snapshot_file
    return config


class TestVersionCheckAppInit:
    def test_invalid_config_raises(self, tmp_path: Path):
        config = _config(tmp_path)
        config.validate.return_value = False

        with pytest.raises(ValueError):
            VersionCheckApp(config)

    def test_slack_notifier_created_when_enabled(self, tmp_path: Path):
        app = VersionCheckApp(_config(tmp_path, slack_enabled=True))

        assert app.slack_notifier is not None
        assert app.slack_notifier.client.default_channel == '#mesh'

    def test_no_notifier_when_disabled(self, tmp_path: Path):
        assert VersionCheckApp(_config(tmp_path)).slack_notifier is None


class TestFileMode:
    def test_writes_results(self, tmp_path: Path):
        snapshot_path = tmp_path / 'snapshot.yaml'
        snapshot_path.write_text(SNAPSHOT_YAML)
        app = VersionCheckApp(_config(tmp_path, snapshot_file=str(snapshot_path)))

        assert app.run_file_mode() == 0

        results = json.loads((tmp_path / 'out' / RESULTS_FILENAME).read_text())
        assert results['status'] == 'WARNING'
        assert results['messages'][0]['resource'] == 'shop/cart'

    def test_sends_report_when_notifier_present(self, tmp_path: Path):
        snapshot_path = tmp_path / 'snapshot.yaml'
        snapshot_path.write_text(SNAPSHOT_YAML)
        notifier = MagicMock()
        app = VersionCheckApp(_config(tmp_path), notifier=notifier)

        assert app.run_file_mode(str(snapshot_path)) == 0

        sent_results, channel = notifier.send_version_report.call_args.args
        assert sent_results['summary']['findings'] == 1
        assert channel == '#mesh'

    def test_missing_file_returns_error(self, tmp_path: Path):
        app = VersionCheckApp(_config(tmp_path))
        assert app.run_file_mode(str(tmp_path / 'missing.yaml')) == 1


class TestScanMode:
    def test_scan_success(self, tmp_path: Path, skewed_snapshot):
        scanner = MagicMock()
        scanner.scan.return_value = check_snapshot(skewed_snapshot)
        app = VersionCheckApp(_config(tmp_path), scanner=scanner)

        assert app.run_scan_mode() == 0
        assert (tmp_path / 'out' / RESULTS_FILENAME).exists()

    def test_scan_failure(self, tmp_path: Path):
        scanner = MagicMock()
        scanner.scan.side_effect = RuntimeError('cluster unreachable')
        app = VersionCheckApp(_config(tmp_path), scanner=scanner)

        assert app.run_scan_mode() == 1


class TestSlackModes:
    def test_test_mode_requires_slack(self, tmp_path: Path):
        assert VersionCheckApp(_config(tmp_path)).run_test_mode() == 1

    def test_test_mode(self, tmp_path: Path):
        notifier = MagicMock()
        app = VersionCheckApp(_config(tmp_path), notifier=notifier)

        assert app.run_test_mode() == 0
        notifier.send_test_message.assert_called_once_with('#mesh')

    def test_sidecar_mode_timeout(self, tmp_path: Path):
        notifier = MagicMock()
        notifier.monitor_for_scan_output.return_value = None
        app = VersionCheckApp(_config(tmp_path), notifier=notifier)

        assert app.run_sidecar_mode() == 1

    def test_sidecar_mode_success(self, tmp_path: Path):
        notifier = MagicMock()
        notifier.monitor_for_scan_output.return_value = {'ok': True}
        app = VersionCheckApp(_config(tmp_path), notifier=notifier)

        assert app.run_sidecar_mode() == 0


class TestMain:
    def test_file_mode_selected(self, monkeypatch, tmp_path: Path):
        monkeypatch.delenv('SIDECAR_MODE', raising=False)
        config = _config(tmp_path, snapshot_file='/data/snapshot.yaml')
        config.is_test_mode.return_value = False
        config.is_debug.return_value = False
        config.log_level = 'INFO'

        with patch.object(main, 'Config', return_value=config), \
                patch.object(main, 'setup_logging'), \
                patch.object(main, 'VersionCheckApp') as app_cls:
            app_cls.return_value.run_file_mode.return_value = 0
            with pytest.raises(SystemExit) as exc:
                main.main()

        assert exc.value.code == 0
        app_cls.return_value.run_file_mode.assert_called_once_with()
        app_cls.return_value.run_scan_mode.assert_not_called()

    def test_fatal_error_exits_1(self, monkeypatch):
        with patch.object(main, 'Config', side_effect=RuntimeError('bad config')):
            with pytest.raises(SystemExit) as exc:
                main.main()

        assert exc.value.code == 1

    def test_logs_masked_configuration(self, monkeypatch, tmp_path: Path, caplog):
        monkeypatch.delenv('SIDECAR_MODE', raising=False)
        config = _config(tmp_path)
        config.is_test_mode.return_value = False
        config.is_debug.return_value = True
        config.log_level = 'DEBUG'
        config.to_dict.return_value = {'slack_bot_token': '***'}

        with caplog.at_level('DEBUG', logger='main'), \
                patch.object(main, 'Config', return_value=config), \
                patch.object(main, 'setup_logging'), \
                patch.object(main, 'VersionCheckApp') as app_cls:
            app_cls.return_value.run_scan_mode.return_value = 0
            with pytest.raises(SystemExit):
                main.main()

        config.to_dict.assert_called_once_with()
        assert "'slack_bot_token': '***'" in caplog.text
