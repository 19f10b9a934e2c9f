"""Hive ClusterDeployment lookup.

A ClusterDeployment lives in the namespace named after its cluster and
carries the same name, so a cluster name is enough to find it.

Parsing is lenient: ClusterDeployment is read as a plain
document and every field is optional. A missing or wrongly typed field
leaves the zero value in ClusterDeploymentInfo instead of failing the parse.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from hubview.errors import ClusterDeploymentNotFoundError, KubeAPIError, ResourceNotFoundError
from hubview.kube import CLUSTER_DEPLOYMENTS, KubeClient
from hubview.models import UNKNOWN, ClusterDeploymentInfo
from hubview.observability import get_logger

logger = get_logger(__name__)

PLATFORM_LABEL = "hive.openshift.io/cluster-platform"
REGION_LABEL = "hive.openshift.io/cluster-region"


def _mapping(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = obj.get(key)
    return value if isinstance(value, Mapping) else {}


def _string(obj: Mapping[str, Any], key: str) -> str:
    value = obj.get(key)
    return value if isinstance(value, str) else ""


def admin_kubeconfig_secret_name(spec: Mapping[str, Any]) -> str:
    """Read ``clusterMetadata.adminKubeconfigSecretRef.name`` from a spec."""
    secret_ref = _mapping(_mapping(spec, "clusterMetadata"), "adminKubeconfigSecretRef")
    return _string(secret_ref, "name")


def parse_cluster_deployment(obj: Mapping[str, Any]) -> ClusterDeploymentInfo:
    """Extract ClusterDeploymentInfo from a ClusterDeployment document."""
    metadata = _mapping(obj, "metadata")
    labels = _mapping(metadata, "labels")
    spec = _mapping(obj, "spec")
    status = _mapping(obj, "status")

    namespace = _string(metadata, "namespace")
    secret_name = admin_kubeconfig_secret_name(spec)

    installed = spec.get("installed")

    # status.powerState is the observed state and overrides the requested one
    power_state = _string(spec, "powerState")
    if isinstance(status.get("powerState"), str):
        power_state = status["powerState"]
    power_state = power_state or UNKNOWN

    return ClusterDeploymentInfo(
        name=_string(metadata, "name"),
        namespace=namespace,
        power_state=power_state,
        installed=installed if isinstance(installed, bool) else False,
        api_url=_string(status, "apiURL"),
        console_url=_string(status, "webConsoleURL"),
        kubeconfig_secret_name=secret_name,
        # The secret always sits next to its ClusterDeployment
        kubeconfig_secret_namespace=namespace if secret_name else "",
        platform=_string(labels, PLATFORM_LABEL),
        region=_string(labels, REGION_LABEL),
        version=_string(status, "installVersion"),
    )


class ClusterDeploymentService:
    """Fetches ClusterDeployment resources by cluster name."""

    def __init__(self, kube: KubeClient):
        self.kube = kube

    async def get(self, cluster_name: str) -> ClusterDeploymentInfo:
        """Get the ClusterDeployment for a cluster.

        Args:
            cluster_name: Cluster name, used as both namespace and name

        Raises:
            ClusterDeploymentNotFoundError: If the cluster has no ClusterDeployment
            KubeAPIError: For authorization or connectivity failures
        """
        try:
            obj = await asyncio.to_thread(
                self.kube.get_namespaced_object,
                CLUSTER_DEPLOYMENTS,
                cluster_name,
                cluster_name,
            )
        except ResourceNotFoundError as e:
            raise ClusterDeploymentNotFoundError(cluster_name) from e
        except KubeAPIError as e:
            raise KubeAPIError(
                f"failed to get ClusterDeployment {cluster_name}: {e}",
                status=e.status,
            ) from e

        return parse_cluster_deployment(obj)
