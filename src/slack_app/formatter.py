"""
Slack Formatter Module

Handles formatting of version check results into Slack message blocks.
"""

from typing import Dict, Any, List

# Slack caps a message at 50 blocks
MAX_FINDINGS = 10


class SlackFormatter:
    """Formats version check results into Slack message blocks."""

    @staticmethod
    def parse_version_summary(data: Dict[str, Any]) -> Dict[str, Any]:
        """Parse version check results to extract summary information."""
        summary = data.get('summary', {})

        return {
            'status': data.get('status', 'UNKNOWN'),
            'scan_time': data.get('scan_time', ''),
            'total_pods': summary.get('total_pods', 0),
            'injected_namespaces': summary.get('injected_namespaces', []),
            'injector_versions': summary.get('injector_versions', []),
            'findings': summary.get('findings', 0),
            'affected_pods': summary.get('affected_pods', 0),
            'messages': data.get('messages', [])
        }

    @staticmethod
    def create_version_blocks(summary: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Create Slack blocks for the version check report."""
        status = summary.get('status', 'UNKNOWN')
        if status == 'CRITICAL':
            status_emoji = "🔴"
        elif status == 'WARNING':
            status_emoji = "⚠️"
        else:
            status_emoji = "✅"

        injector_versions = summary.get('injector_versions', [])
        versions_text = ', '.join(f"`{v}`" for v in injector_versions) if injector_versions else "_not detected_"

        blocks = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"{status_emoji} Istio Injection Version Check Report",
                    "emoji": True
                }
            },
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"*Status:* {status}\n*Scan Time:* {summary.get('scan_time') or 'Unknown'}\n*Injector Versions:* {versions_text}"
                }
            },
            {
                "type": "section",
                "fields": [
                    {
                        "type": "mrkdwn",
                        "text": f"*Injected Namespaces:*\n`{len(summary.get('injected_namespaces', []))}`"
                    },
                    {
                        "type": "mrkdwn",
                        "text": f"*Pods Scanned:*\n`{summary.get('total_pods', 0)}`"
                    },
                    {
                        "type": "mrkdwn",
                        "text": f"*Affected Pods:*\n🔴 `{summary.get('affected_pods', 0)}`"
                    },
                    {
                        "type": "mrkdwn",
                        "text": f"*Findings:*\n⚠️ `{summary.get('findings', 0)}`"
                    }
                ]
            }
        ]

        messages = summary.get('messages', [])
        if messages:
            blocks.append({"type": "divider"})
            blocks.append({
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": "*⚠️ Proxy Version Mismatches:*"
                }
            })
            for message in messages[:MAX_FINDINGS]:
                blocks.append({
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": (
                            f"• *{message.get('resource', 'Unknown')}* [{message.get('code', '')}]: "
                            f"proxy `{message.get('pod_version', '?')}`, injector `{message.get('injector_version', '?')}`"
                        )
                    }
                })
            if len(messages) > MAX_FINDINGS:
                blocks.append({
                    "type": "context",
                    "elements": [
                        {
                            "type": "mrkdwn",
                            "text": f"…and {len(messages) - MAX_FINDINGS} more. See the HTML report for the full list."
                        }
                    ]
                })

            blocks.append({"type": "divider"})
            blocks.append({
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": "*💡 Recommendation:* Redeploy the affected pods so the sidecar injector can update their proxies."
                }
            })

        return blocks

    @staticmethod
    def create_test_blocks() -> List[Dict[str, Any]]:
        """Create test blocks for testing Slack integration."""
        return [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": "🧪 Test Message from Istio Injection Version Checker",
                    "emoji": True
                }
            },
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": "This is a test message to verify Slack integration is working correctly."
                }
            }
        ]
