"""
HTML Report Generator Module

Converts injection version check results into a standalone HTML report.
"""

import time
from html import escape
from typing import Dict, Any, List


class HTMLReportGenerator:
    """Generates HTML reports from version check results."""

    @staticmethod
    def generate_version_report(results: Dict[str, Any], output_path: str = None) -> str:
        """
        Generate a styled HTML report from version check results.

        Args:
            results: Version check results
            output_path: Optional path to save the HTML file

        Returns:
            HTML content as string
        """
        summary = results.get('summary', {})
        messages = results.get('messages', [])
        status = results.get('status', 'UNKNOWN')

        if status == 'CRITICAL':
            status_color = "#ef4444"
        elif status == 'WARNING':
            status_color = "#f59e0b"
        else:
            status_color = "#10b981"

        html = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Istio Injection Version Check Report - {time.strftime('%Y-%m-%d %H:%M:%S UTC', time.gmtime())}</title>
    <style>
        * {{
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }}

        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            padding: 20px;
            line-height: 1.6;
        }}

        .container {{
            max-width: 1200px;
            margin: 0 auto;
            background: white;
            border-radius: 12px;
            box-shadow: 0 20px 60px rgba(0,0,0,0.3);
            overflow: hidden;
        }}

        .header {{
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
            padding: 40px;
            text-align: center;
        }}

        .status-banner {{
            background: {status_color};
            color: white;
            padding: 30px;
            text-align: center;
            font-size: 1.8em;
            font-weight: bold;
            text-transform: uppercase;
            letter-spacing: 2px;
        }}

        .summary {{
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(180px, 1fr));
            gap: 20px;
            padding: 40px;
            background: #f9fafb;
        }}

        .summary-card {{
            background: white;
            padding: 25px;
            border-radius: 8px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
            text-align: center;
        }}

        .summary-card .number {{
            font-size: 3em;
            font-weight: bold;
            margin: 10px 0;
        }}

        .summary-card .label {{
            color: #6b7280;
            font-size: 0.9em;
            text-transform: uppercase;
            letter-spacing: 1px;
        }}

        .total {{ color: #3b82f6; }}
        .issues {{ color: #ef4444; }}
        .healthy {{ color: #10b981; }}

        .content {{
            padding: 40px;
        }}

        .section {{
            margin-bottom: 40px;
        }}

        .section h2 {{
            font-size: 1.8em;
            margin-bottom: 20px;
            color: #1f2937;
        }}

        table {{
            width: 100%;
            border-collapse: collapse;
        }}

        th, td {{
            text-align: left;
            padding: 10px;
            border-bottom: 1px solid #e5e7eb;
        }}

        td.version {{
            font-family: 'Courier New', monospace;
        }}

        .detail {{
            background: #f9fafb;
            padding: 15px;
            margin-bottom: 10px;
            border-left: 4px solid #667eea;
            border-radius: 4px;
        }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>🧬 Istio Injection Version Check</h1>
            <div class="timestamp">Generated: {escape(str(results.get('scan_time', 'Unknown')))}</div>
        </div>

        <div class="status-banner">
            Status: {escape(str(status))}
        </div>

        <div class="summary">
            <div class="summary-card">
                <div class="label">Injected Namespaces</div>
                <div class="number total">{len(summary.get('injected_namespaces', []))}</div>
            </div>
            <div class="summary-card">
                <div class="label">Pods Scanned</div>
                <div class="number total">{summary.get('total_pods', 0)}</div>
            </div>
            <div class="summary-card">
                <div class="label">Affected Pods</div>
                <div class="number issues">{summary.get('affected_pods', 0)}</div>
            </div>
            <div class="summary-card">
                <div class="label">Findings</div>
                <div class="number issues">{summary.get('findings', 0)}</div>
            </div>
        </div>

        <div class="content">
            {HTMLReportGenerator._generate_injector_section(summary)}
            {HTMLReportGenerator._generate_findings_section(messages)}
        </div>
    </div>
</body>
</html>"""

        if output_path:
            with open(output_path, 'w') as f:
                f.write(html)

        return html

    @staticmethod
    def _generate_injector_section(summary: Dict[str, Any]) -> str:
        """Generate injector versions and injected namespaces section."""
        versions = summary.get('injector_versions', [])
        namespaces = summary.get('injected_namespaces', [])

        versions_text = ', '.join(escape(v) for v in versions) if versions else 'No injector detected'
        namespaces_text = ', '.join(escape(ns) for ns in namespaces) if namespaces else 'None'

        return f'''<div class="section"><h2>💉 Sidecar Injector</h2>
            <div class="detail">
                <strong>Injector versions:</strong>
                <div class="value">{versions_text}</div>
            </div>
            <div class="detail">
                <strong>Injection-enabled namespaces:</strong>
                <div class="value">{namespaces_text}</div>
            </div>
        </div>'''

    @staticmethod
    def _generate_findings_section(messages: List[Dict[str, Any]]) -> str:
        """Generate the findings table."""
        if not messages:
            return '<div class="section"><h2>✅ Findings</h2><p class="healthy">All proxies match the injector version.</p></div>'

        rows = ''
        for message in messages:
            rows += f'''
                <tr>
                    <td>{escape(message.get('code', ''))}</td>
                    <td>{escape(message.get('resource', 'Unknown'))}</td>
                    <td class="version">{escape(message.get('pod_version', '-'))}</td>
                    <td class="version">{escape(message.get('injector_version', '-'))}</td>
                </tr>'''

        return f'''<div class="section"><h2>⚠️ Proxy Version Mismatches</h2>
            <table>
                <tr><th>Code</th><th>Pod</th><th>Proxy Version</th><th>Injector Version</th></tr>{rows}
            </table>
            <p>Redeploy the affected pods so the injector can update their proxies.</p>
        </div>'''
