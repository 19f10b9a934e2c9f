"""Custom resource types read from the hub."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupVersionResource:
    """Identifies a custom resource collection on the API server."""

    group: str
    version: str
    plural: str
    kind: str

    def __str__(self) -> str:
        return f"{self.plural}.{self.group}/{self.version}"


MANAGED_CLUSTERS = GroupVersionResource(
    group="cluster.open-cluster-management.io",
    version="v1",
    plural="managedclusters",
    kind="ManagedCluster",
)

CLUSTER_DEPLOYMENTS = GroupVersionResource(
    group="hive.openshift.io",
    version="v1",
    plural="clusterdeployments",
    kind="ClusterDeployment",
)
