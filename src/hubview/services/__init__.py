"""Business logic services."""

from .cluster_deployments import ClusterDeploymentService, parse_cluster_deployment
from .combined import CombinedClusterService
from .kubeconfig import KubeconfigExtractor, normalize_kubeconfig
from .managed_clusters import (
    ManagedClusterService,
    available_condition,
    derive_status,
    filter_by_status,
)

__all__ = [
    "ClusterDeploymentService",
    "CombinedClusterService",
    "KubeconfigExtractor",
    "ManagedClusterService",
    "available_condition",
    "derive_status",
    "filter_by_status",
    "normalize_kubeconfig",
    "parse_cluster_deployment",
]
