"""
Shared test fixtures for the injection version check.
"""

import pytest

from injection_analyzer.resources import (
    NAMESPACES_COLLECTION,
    PODS_COLLECTION,
    Container,
    Snapshot,
    new_namespace,
    new_pod,
)


def _namespace(name, injected=True, value='enabled'):
    labels = {'istio-injection': value} if injected else {}
    return new_namespace(name, labels)


def _injector(version, name='istio-sidecar-injector-1', namespace='istio-system'):
    image = f"docker.io/istio/sidecar_injector:{version}" if version else "docker.io/istio/sidecar_injector"
    return new_pod(
        name,
        namespace,
        [Container('sidecar-injector-webhook', image)],
        labels={'app': 'sidecarInjectorWebhook'}
    )


def _workload(name, namespace='default', proxy_image=None, annotations=None):
    containers = [Container('app', 'myapp:latest')]
    if proxy_image is not None:
        containers.append(Container('istio-proxy', proxy_image))
    return new_pod(name, namespace, containers, labels={'app': name}, annotations=annotations)


@pytest.fixture
def make_namespace():
    """Factory for Namespace resources; injected=True adds istio-injection=enabled."""
    return _namespace


@pytest.fixture
def make_injector():
    """Factory for sidecar injector pods running the given version."""
    return _injector


@pytest.fixture
def make_workload():
    """Factory for workload pods, optionally with an istio-proxy sidecar image."""
    return _workload


@pytest.fixture
def make_snapshot():
    """Factory building a Snapshot from namespace and pod lists."""
    def _make(namespaces=(), pods=()):
        return Snapshot({
            NAMESPACES_COLLECTION: list(namespaces),
            PODS_COLLECTION: list(pods),
        })
    return _make


@pytest.fixture
def skewed_snapshot(make_snapshot):
    """Injector at 1.2.0, one stale proxy at 1.1.0 and one current proxy in an injected namespace."""
    return make_snapshot(
        namespaces=[_namespace('default'), _namespace('istio-system', injected=False)],
        pods=[
            _injector('1.2.0'),
            _workload('web-1', proxy_image='docker.io/istio/proxyv2:1.1.0'),
            _workload('web-2', proxy_image='docker.io/istio/proxyv2:1.2.0'),
        ]
    )
