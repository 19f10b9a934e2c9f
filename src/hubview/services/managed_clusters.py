"""Managed cluster listing and status derivation.

Status derivation priority:
1. Unreachable taint present -> NotReady
2. ManagedClusterConditionAvailable:
   - True -> Ready
   - False -> NotReady
   - Unknown -> Unknown
3. No Available condition -> Unknown
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

from pydantic import ValidationError

from hubview.errors import ClusterConversionError, KubeAPIError
from hubview.kube import MANAGED_CLUSTERS, KubeClient
from hubview.models import (
    UNKNOWN,
    ClusterStatus,
    ConditionStatus,
    ManagedCluster,
    ManagedClusterFilter,
    ManagedClusterInfo,
)
from hubview.observability import get_logger

logger = get_logger(__name__)

UNREACHABLE_TAINT_KEY = "cluster.open-cluster-management.io/unreachable"
AVAILABLE_CONDITION_TYPE = "ManagedClusterConditionAvailable"

_CONDITION_TO_STATUS = {
    ConditionStatus.TRUE.value: ClusterStatus.READY,
    ConditionStatus.FALSE.value: ClusterStatus.NOT_READY,
    ConditionStatus.UNKNOWN.value: ClusterStatus.UNKNOWN,
}


class _HasStatus(Protocol):
    status: Any


T = TypeVar("T", bound=_HasStatus)


def derive_status(cluster: ManagedCluster) -> ClusterStatus:
    """Determine the overall status of a managed cluster.

    An unreachable taint wins over any condition: an excluded cluster is
    never Ready, whatever its last reported condition says.
    """
    for taint in cluster.spec.taints:
        if taint.key == UNREACHABLE_TAINT_KEY:
            return ClusterStatus.NOT_READY

    condition = cluster.find_condition(AVAILABLE_CONDITION_TYPE)
    if condition is None:
        return ClusterStatus.UNKNOWN
    return _CONDITION_TO_STATUS.get(condition.status, ClusterStatus.UNKNOWN)


def available_condition(cluster: ManagedCluster) -> tuple[str, str]:
    """Return the Available condition's (status, message), or ("Unknown", "")."""
    condition = cluster.find_condition(AVAILABLE_CONDITION_TYPE)
    if condition is None:
        return UNKNOWN, ""
    return condition.status, condition.message


def to_cluster_info(cluster: ManagedCluster) -> ManagedClusterInfo:
    available, message = available_condition(cluster)
    return ManagedClusterInfo(
        name=cluster.name,
        status=derive_status(cluster),
        available=available,
        message=message,
    )


def filter_by_status(clusters: Sequence[T], status: ClusterStatus | str | None) -> list[T]:
    """Keep clusters whose ``status`` equals the given value, in order.

    Works for any record with a ``status`` attribute. An empty status returns
    every cluster.
    """
    if not status:
        return list(clusters)
    wanted = status.value if isinstance(status, ClusterStatus) else status
    return [cluster for cluster in clusters if cluster.status == wanted]


class ManagedClusterService:
    """Lists ManagedCluster resources from the hub."""

    def __init__(self, kube: KubeClient):
        self.kube = kube

    async def list_clusters(self) -> list[ManagedClusterInfo]:
        """List all managed clusters with their derived status.

        Raises:
            KubeAPIError: If the list call fails
            ClusterConversionError: If an item is not a valid ManagedCluster
        """
        try:
            items = await asyncio.to_thread(self.kube.list_cluster_objects, MANAGED_CLUSTERS)
        except KubeAPIError as e:
            raise KubeAPIError(f"failed to list managed clusters: {e}", status=e.status) from e

        clusters = [to_cluster_info(self._convert(item)) for item in items]
        logger.debug("Listed managed clusters", count=len(clusters))
        return clusters

    def filter(
        self,
        clusters: Sequence[ManagedClusterInfo],
        cluster_filter: ManagedClusterFilter,
    ) -> list[ManagedClusterInfo]:
        """Filter clusters by the criteria in ``cluster_filter``."""
        return filter_by_status(clusters, cluster_filter.status)

    @staticmethod
    def _convert(item: Any) -> ManagedCluster:
        try:
            return ManagedCluster.model_validate(item)
        except ValidationError as e:
            metadata = item.get("metadata") if isinstance(item, dict) else None
            name = metadata.get("name") if isinstance(metadata, dict) else None
            name = name or "<unnamed>"
            raise ClusterConversionError(
                f"failed to convert ManagedCluster {name}: {e}"
            ) from e
