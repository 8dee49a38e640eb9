"""
Diagnostic Messages Module

Message types and levels reported by the analyzers.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from .resources import Resource


class Level:
    """Severity of a diagnostic message."""

    ERROR = 'Error'
    WARNING = 'Warning'
    INFO = 'Info'

    # Short labels used in rendered messages
    SHORT = {
        ERROR: 'Error',
        WARNING: 'Warn',
        INFO: 'Info',
    }


@dataclass(frozen=True)
class MessageType:
    code: str
    name: str
    level: str
    template: str


ISTIO_PROXY_VERSION_MISMATCH = MessageType(
    code='IST0105',
    name='IstioProxyVersionMismatch',
    level=Level.WARNING,
    template=(
        "The version of the Istio proxy running on the pod does not match the version "
        "used by the istio injector (pod version: %s; injector version: %s). This often "
        "happens after upgrading the Istio control-plane and can be fixed by redeploying the pod."
    )
)


@dataclass(frozen=True)
class Message:
    """A single finding: its type, the offending resource and the template parameters."""

    type: MessageType
    resource: Resource
    parameters: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return self.type.template % self.parameters

    @property
    def origin(self) -> str:
        return str(self.resource)

    def render(self) -> str:
        return f"{Level.SHORT[self.type.level]} [{self.type.code}] ({self.origin}) {self.text}"

    def __str__(self) -> str:
        return self.render()

    def __hash__(self) -> int:
        return hash((self.type.code, str(self.resource.full_name), self.parameters))

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'code': self.type.code,
            'name': self.type.name,
            'level': self.type.level,
            'origin': self.origin,
            'resource': str(self.resource.full_name),
            'message': self.text,
        }
        if self.type is ISTIO_PROXY_VERSION_MISMATCH:
            data['pod_version'], data['injector_version'] = self.parameters
        return data


def new_istio_proxy_version_mismatch(resource: Resource, proxy_version: str,
                                     injector_version: str) -> Message:
    """Create an IstioProxyVersionMismatch message for a pod."""
    return Message(ISTIO_PROXY_VERSION_MISMATCH, resource, (proxy_version, injector_version))


def sort_messages(messages: Iterable[Message]) -> List[Message]:
    """Order messages by origin, then code, then text."""
    return sorted(messages, key=lambda m: (m.origin, m.type.code, m.text))
