"""
Injection Analyzer Module

Checks the sidecar injector version against the proxies running on pods
in injection-enabled namespaces.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .constants import (
    APP_LABEL_NAME,
    INJECTION_LABEL_ENABLE_VALUE,
    INJECTION_LABEL_NAME,
    INJECTOR_CONTAINER_NAME,
    ISTIO_PROXY_CONTAINER_NAME,
    PROXY_IMAGE_ANNOTATION,
    SIDECAR_INJECTOR_LABEL_VALUE,
)
from .messages import Message, new_istio_proxy_version_mismatch
from .resources import (
    NAMESPACES_COLLECTION,
    PODS_COLLECTION,
    Container,
    PodBody,
    Resource,
    Snapshot,
    as_namespace,
    as_pod,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Metadata:
    name: str
    description: str
    inputs: Tuple[str, ...]


class AnalysisContext:
    """Read access to a snapshot plus a sink for reported messages."""

    def __init__(self, snapshot: Snapshot):
        self.snapshot = snapshot
        self.reported: List[Tuple[str, Message]] = []

    @property
    def messages(self) -> List[Message]:
        return [message for _, message in self.reported]

    def for_each(self, collection: str, visitor: Callable[[Resource], bool]) -> None:
        self.snapshot.for_each(collection, visitor)

    def report(self, collection: str, message: Message) -> None:
        self.reported.append((collection, message))


class Analyzer:
    """Base class for snapshot analyzers."""

    def metadata(self) -> Metadata:
        raise NotImplementedError

    def analyze(self, context: AnalysisContext) -> None:
        raise NotImplementedError


class VersionAnalyzer(Analyzer):
    """Checks the version of auto-injection configured with the running proxies on pods."""

    def metadata(self) -> Metadata:
        return Metadata(
            name='injection.VersionAnalyzer',
            description='Checks the version of auto-injection configured with the running proxies on pods',
            inputs=(NAMESPACES_COLLECTION, PODS_COLLECTION)
        )

    def analyze(self, context: AnalysisContext) -> None:
        injected_namespaces: Set[str] = set()

        def visit_namespace(r: Resource) -> bool:
            if as_namespace(r).labels.get(INJECTION_LABEL_NAME) == INJECTION_LABEL_ENABLE_VALUE:
                injected_namespaces.add(str(r.full_name))
            return True

        context.for_each(NAMESPACES_COLLECTION, visit_namespace)

        injector_versions: Set[str] = set()
        pod_versions: List[Tuple[Resource, str]] = []

        def visit_pod(r: Resource) -> bool:
            pod = as_pod(r)

            # Injector pods count wherever they run
            v = try_return_sidecar_injector_version(pod)
            if v:
                injector_versions.add(v)

            if pod.namespace not in injected_namespaces:
                return True

            # A pinned proxy image always wins over the injector
            if r.annotations.get(PROXY_IMAGE_ANNOTATION):
                return True

            for container in pod.containers:
                if container.name != ISTIO_PROXY_CONTAINER_NAME:
                    continue
                v = get_container_name_version(container)
                if not v:
                    continue
                pod_versions.append((r, v))

            return True

        context.for_each(PODS_COLLECTION, visit_pod)

        logger.debug(
            f"Found {len(injected_namespaces)} injected namespaces, injector versions "
            f"{sorted(injector_versions)}, {len(pod_versions)} versioned proxies"
        )

        for iv in injector_versions:
            for resource, pv in pod_versions:
                if pv != iv:
                    logger.info(f"Proxy version mismatch on {resource.full_name}: pod {pv}, injector {iv}")
                    context.report(PODS_COLLECTION, new_istio_proxy_version_mismatch(resource, pv, iv))


def try_return_sidecar_injector_version(pod: PodBody) -> str:
    """
    Return the injector image version if the pod is the sidecar injector.

    Returns an empty string for any other pod, or when the injector
    container's image carries no parseable tag.
    """
    if pod.labels.get(APP_LABEL_NAME) != SIDECAR_INJECTOR_LABEL_VALUE:
        return ''

    for container in pod.containers:
        if container.name != INJECTOR_CONTAINER_NAME:
            continue
        return get_container_name_version(container)

    return ''


def get_container_name_version(container: Container) -> str:
    """
    Parse the version from a container image reference.

    Only `repository:tag` is understood: any image that does not split into
    exactly two parts on ':' (no tag, or a registry port) yields ''.
    """
    parts = container.image.split(':')
    if len(parts) != 2:
        return ''
    return parts[1]


def all_analyzers() -> List[Analyzer]:
    return [VersionAnalyzer()]


def required_collections(analyzers: Iterable[Analyzer]) -> List[str]:
    """Union of the input collections of the given analyzers, in first-seen order."""
    collections: List[str] = []
    for analyzer in analyzers:
        for name in analyzer.metadata().inputs:
            if name not in collections:
                collections.append(name)
    return collections


def run_analyzers(snapshot: Snapshot, analyzers: Optional[Iterable[Analyzer]] = None) -> List[Message]:
    """
    Run analyzers over a snapshot and collect their messages.

    Args:
        snapshot: Resources to analyze
        analyzers: Analyzers to run (default: all)

    Returns:
        Messages reported by all analyzers

    Raises:
        ValueError: If the snapshot lacks a collection an analyzer needs
    """
    analyzers = list(analyzers) if analyzers is not None else all_analyzers()
    context = AnalysisContext(snapshot)

    for analyzer in analyzers:
        meta = analyzer.metadata()
        missing = [name for name in meta.inputs if not snapshot.has_collection(name)]
        if missing:
            raise ValueError(f"Analyzer {meta.name} requires missing collections: {', '.join(missing)}")

        logger.info(f"🔍 Running analyzer {meta.name}...")
        analyzer.analyze(context)

    return context.messages
