"""
Resource Model Module

Typed handles for the cluster resources the analyzers read, and the
snapshot that exposes them by collection name.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

NAMESPACES_COLLECTION = 'k8s/core/v1/namespaces'
PODS_COLLECTION = 'k8s/core/v1/pods'

# Manifest kind -> collection name
KIND_COLLECTIONS = {
    'Namespace': NAMESPACES_COLLECTION,
    'Pod': PODS_COLLECTION,
}


@dataclass(frozen=True)
class FullName:
    """Qualified name of a resource; namespace is empty for cluster-scoped kinds."""

    name: str
    namespace: str = ''

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name


@dataclass(frozen=True)
class Container:
    name: str
    image: str = ''


@dataclass
class NamespaceBody:
    name: str
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass
class PodBody:
    name: str
    namespace: str
    labels: Dict[str, str] = field(default_factory=dict)
    containers: List[Container] = field(default_factory=list)


@dataclass
class Resource:
    """A snapshot entry: metadata plus a typed payload (Pod or Namespace body)."""

    full_name: FullName
    kind: str
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    message: Any = None

    def __str__(self) -> str:
        return f"{self.kind} {self.full_name}"


def as_pod(resource: Resource) -> PodBody:
    """Return the Pod payload of a resource, failing loudly on any other shape."""
    if not isinstance(resource.message, PodBody):
        raise TypeError(f"{resource} does not carry a Pod payload: {type(resource.message).__name__}")
    return resource.message


def as_namespace(resource: Resource) -> NamespaceBody:
    """Return the Namespace payload of a resource."""
    if not isinstance(resource.message, NamespaceBody):
        raise TypeError(f"{resource} does not carry a Namespace payload: {type(resource.message).__name__}")
    return resource.message


def new_namespace(name: str, labels: Optional[Dict[str, str]] = None,
                  annotations: Optional[Dict[str, str]] = None) -> Resource:
    labels = dict(labels or {})
    return Resource(
        full_name=FullName(name),
        kind='Namespace',
        labels=labels,
        annotations=dict(annotations or {}),
        message=NamespaceBody(name=name, labels=labels)
    )


def new_pod(name: str, namespace: str, containers: Iterable[Container] = (),
            labels: Optional[Dict[str, str]] = None,
            annotations: Optional[Dict[str, str]] = None) -> Resource:
    labels = dict(labels or {})
    return Resource(
        full_name=FullName(name, namespace),
        kind='Pod',
        labels=labels,
        annotations=dict(annotations or {}),
        message=PodBody(name=name, namespace=namespace, labels=labels, containers=list(containers))
    )


def resource_from_manifest(manifest: Dict[str, Any]) -> Optional[Resource]:
    """
    Convert a Kubernetes manifest dictionary into a Resource.

    Args:
        manifest: Parsed manifest (kind Namespace or Pod)

    Returns:
        Resource, or None if the kind is not one the analyzers read
    """
    kind = manifest.get('kind')
    metadata = manifest.get('metadata') or {}
    name = metadata.get('name', '')
    labels = metadata.get('labels') or {}
    annotations = metadata.get('annotations') or {}

    if kind == 'Namespace':
        return new_namespace(name, labels, annotations)

    if kind == 'Pod':
        spec = manifest.get('spec') or {}
        containers = [
            Container(name=c.get('name', ''), image=c.get('image') or '')
            for c in spec.get('containers') or []
        ]
        return new_pod(name, metadata.get('namespace') or 'default', containers, labels, annotations)

    return None


class Snapshot:
    """Point-in-time set of resources, grouped by collection name."""

    def __init__(self, collections: Optional[Dict[str, List[Resource]]] = None):
        self._collections: Dict[str, List[Resource]] = {}
        for name, resources in (collections or {}).items():
            self._collections[name] = list(resources)

    @classmethod
    def from_manifests(cls, manifests: Iterable[Dict[str, Any]]) -> 'Snapshot':
        """Build a snapshot from manifest dictionaries, flattening `kind: List` documents."""
        snapshot = cls({NAMESPACES_COLLECTION: [], PODS_COLLECTION: []})
        for manifest in manifests:
            if not isinstance(manifest, dict):
                if manifest is not None:
                    logger.debug(f"Skipping non-mapping document: {manifest!r}")
                continue
            kind = manifest.get('kind') or ''
            if kind.endswith('List'):
                # PodList items omit their own kind
                item_kind = kind[:-len('List')] or None
                for item in manifest.get('items') or []:
                    if not isinstance(item, dict):
                        logger.debug(f"Skipping non-mapping list item: {item!r}")
                        continue
                    if item_kind and not item.get('kind'):
                        item = dict(item, kind=item_kind)
                    snapshot._add_manifest(item)
                continue
            snapshot._add_manifest(manifest)
        return snapshot

    def _add_manifest(self, manifest: Dict[str, Any]) -> None:
        resource = resource_from_manifest(manifest)
        if resource is None:
            logger.debug(f"Skipping unsupported manifest kind: {manifest.get('kind')}")
            return
        self.add(KIND_COLLECTIONS[resource.kind], resource)

    def add(self, collection: str, resource: Resource) -> None:
        self._collections.setdefault(collection, []).append(resource)

    def put(self, collection: str, resources: Iterable[Resource]) -> None:
        """Replace a whole collection."""
        self._collections[collection] = list(resources)

    def has_collection(self, collection: str) -> bool:
        return collection in self._collections

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, []))

    def for_each(self, collection: str, visitor: Callable[[Resource], bool]) -> None:
        """
        Invoke visitor once per resource in the collection.

        Iteration stops early when the visitor returns a false value. An
        unknown collection iterates nothing.
        """
        for resource in self._collections.get(collection, []):
            if not visitor(resource):
                break
