"""Kubernetes API access."""

from .client import KubeClient
from .resources import CLUSTER_DEPLOYMENTS, MANAGED_CLUSTERS, GroupVersionResource

__all__ = [
    "CLUSTER_DEPLOYMENTS",
    "GroupVersionResource",
    "KubeClient",
    "MANAGED_CLUSTERS",
]
