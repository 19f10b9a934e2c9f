"""Data models for hubview.

All models follow these conventions:
- Field names: lowercase snake_case
- Status values: the strings the hub reports (Ready, NotReady, Unknown)
"""

# Base
from .base import HubviewBaseModel, WireModel

# Cluster domain
from .cluster import (
    NOT_APPLICABLE,
    UNKNOWN,
    ClusterDeploymentInfo,
    ClusterStatus,
    CombinedClusterInfo,
    Condition,
    ConditionStatus,
    ManagedCluster,
    ManagedClusterFilter,
    ManagedClusterInfo,
    ManagedClusterSpec,
    ManagedClusterStatus,
    ObjectMeta,
    Taint,
)

__all__ = [
    # Base
    "HubviewBaseModel",
    "WireModel",
    # Sentinels
    "NOT_APPLICABLE",
    "UNKNOWN",
    # Enums
    "ClusterStatus",
    "ConditionStatus",
    # Wire models
    "Condition",
    "ManagedCluster",
    "ManagedClusterSpec",
    "ManagedClusterStatus",
    "ObjectMeta",
    "Taint",
    # Views
    "ClusterDeploymentInfo",
    "CombinedClusterInfo",
    "ManagedClusterFilter",
    "ManagedClusterInfo",
]
