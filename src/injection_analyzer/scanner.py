"""
Injection Scanner Module

Builds resource snapshots from a live cluster or from manifest files and
runs the injection analyzers over them.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import yaml
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from .analyzer import (
    Analyzer,
    all_analyzers,
    required_collections,
    run_analyzers,
    try_return_sidecar_injector_version,
)
from .constants import INJECTION_LABEL_ENABLE_VALUE, INJECTION_LABEL_NAME
from .messages import Level, Message, sort_messages
from .resources import (
    NAMESPACES_COLLECTION,
    PODS_COLLECTION,
    Container,
    PodBody,
    Resource,
    Snapshot,
    new_namespace,
    new_pod,
)

logger = logging.getLogger(__name__)

RESULTS_FILENAME = 'version-check-results.json'


def resource_from_api_object(obj: Any) -> Resource:
    """
    Convert a Kubernetes API model (V1Pod or V1Namespace) into a Resource.

    Raises:
        TypeError: For any other object type
    """
    metadata = obj.metadata
    labels = metadata.labels or {}
    annotations = metadata.annotations or {}

    if isinstance(obj, client.V1Pod):
        containers = [
            Container(name=c.name, image=c.image or '')
            for c in (obj.spec.containers if obj.spec else None) or []
        ]
        return new_pod(metadata.name, metadata.namespace, containers, labels, annotations)

    if isinstance(obj, client.V1Namespace):
        return new_namespace(metadata.name, labels, annotations)

    raise TypeError(f"Unsupported Kubernetes object: {type(obj).__name__}")


def load_snapshot_file(file_path: str) -> Snapshot:
    """
    Load a snapshot from a YAML (or JSON) manifest file.

    The file may hold several documents and `kind: List` wrappers, as
    produced by `kubectl get namespaces,pods -A -o yaml`.

    Args:
        file_path: Path to the manifest file

    Returns:
        Snapshot of the Namespace and Pod resources in the file
    """
    logger.info(f"📁 Loading snapshot from {file_path}")
    try:
        with open(file_path, 'r') as f:
            documents = [doc for doc in yaml.safe_load_all(f) if doc]
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load snapshot file {file_path}: {e}")
        raise

    snapshot = Snapshot.from_manifests(documents)
    logger.info(
        f"Loaded {snapshot.count(NAMESPACES_COLLECTION)} namespaces and "
        f"{snapshot.count(PODS_COLLECTION)} pods from {file_path}"
    )
    return snapshot


def build_results(snapshot: Snapshot, messages: List[Message]) -> Dict[str, Any]:
    """
    Summarize analyzer messages over a snapshot into a results dictionary.

    Args:
        snapshot: The analyzed snapshot
        messages: Messages reported by the analyzers

    Returns:
        Dictionary with scan time, status, summary and messages
    """
    messages = sort_messages(messages)

    injected = []
    injector_versions = set()

    def visit_namespace(r: Resource) -> bool:
        if r.labels.get(INJECTION_LABEL_NAME) == INJECTION_LABEL_ENABLE_VALUE:
            injected.append(str(r.full_name))
        return True

    def visit_pod(r: Resource) -> bool:
        if isinstance(r.message, PodBody):
            version = try_return_sidecar_injector_version(r.message)
            if version:
                injector_versions.add(version)
        return True

    snapshot.for_each(NAMESPACES_COLLECTION, visit_namespace)
    snapshot.for_each(PODS_COLLECTION, visit_pod)

    if any(m.type.level == Level.ERROR for m in messages):
        status = 'CRITICAL'
    elif messages:
        status = 'WARNING'
    else:
        status = 'HEALTHY'

    return {
        'scan_time': datetime.now(timezone.utc).isoformat(),
        'status': status,
        'summary': {
            'total_namespaces': snapshot.count(NAMESPACES_COLLECTION),
            'injected_namespaces': sorted(injected),
            'total_pods': snapshot.count(PODS_COLLECTION),
            'injector_versions': sorted(injector_versions),
            'findings': len(messages),
            'affected_pods': len({m.origin for m in messages}),
        },
        'messages': [m.to_dict() for m in messages]
    }


def check_snapshot(snapshot: Snapshot, analyzers: Optional[Iterable[Analyzer]] = None) -> Dict[str, Any]:
    """Run analyzers over a snapshot and return the results dictionary."""
    messages = run_analyzers(snapshot, analyzers)
    return build_results(snapshot, messages)


def save_results(results: Dict[str, Any], file_path: str) -> None:
    """
    Save check results to a JSON file.

    Args:
        results: Results dictionary from check_snapshot
        file_path: Path to save the results
    """
    with open(file_path, 'w') as f:
        json.dump(results, f, indent=2)

    logger.info(f"✅ Version check results saved to {file_path}")


class ClusterScanner:
    """Snapshots a live cluster and checks injector and proxy versions."""

    def __init__(self, api: Optional[client.CoreV1Api] = None):
        """
        Initialize the cluster scanner.

        Args:
            api: CoreV1Api to use; built from in-cluster config or kubeconfig if omitted
        """
        if api is not None:
            self.v1 = api
            return

        try:
            # Try to load in-cluster config first, then kubeconfig
            try:
                config.load_incluster_config()
                logger.info("Loaded in-cluster Kubernetes config")
            except config.ConfigException:
                config.load_kube_config()
                logger.info("Loaded kubeconfig")

            self.v1 = client.CoreV1Api()
        except Exception as e:
            logger.error(f"Failed to initialize Kubernetes client: {e}")
            raise

    def build_snapshot(self, collections: Iterable[str]) -> Snapshot:
        """
        Fetch the requested collections from the cluster.

        Args:
            collections: Collection names to load

        Returns:
            Snapshot holding every requested collection
        """
        snapshot = Snapshot()
        for collection in collections:
            try:
                if collection == NAMESPACES_COLLECTION:
                    items = self.v1.list_namespace().items
                elif collection == PODS_COLLECTION:
                    items = self.v1.list_pod_for_all_namespaces().items
                else:
                    raise ValueError(f"Unsupported collection: {collection}")
            except ApiException as e:
                logger.error(f"API error listing {collection}: {e}")
                raise

            snapshot.put(collection, [resource_from_api_object(item) for item in items])
            logger.info(f"Fetched {len(items)} resources for {collection}")

        return snapshot

    def scan(self, analyzers: Optional[Iterable[Analyzer]] = None) -> Dict[str, Any]:
        """
        Snapshot the cluster and run the analyzers.

        Args:
            analyzers: Analyzers to run (default: all)

        Returns:
            Results dictionary (see build_results)
        """
        analyzers = list(analyzers) if analyzers is not None else all_analyzers()
        logger.info("Scanning cluster for injection version skew...")
        snapshot = self.build_snapshot(required_collections(analyzers))
        return check_snapshot(snapshot, analyzers)
