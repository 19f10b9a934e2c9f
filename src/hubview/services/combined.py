"""Combined cluster view.

Joins every ManagedCluster with the ClusterDeployment of the same name.
Lookups run concurrently (bounded by a semaphore) and each cluster's outcome
is handled on its own:

- found: ClusterDeployment fields are copied
- not found: provisioning fields are "N/A" (e.g. imported, non-Hive clusters)
- any other error: provisioning fields are "Unknown"; the rest of the fleet
  is still reported
"""

from __future__ import annotations

import asyncio

import structlog

from hubview.errors import ClusterDeploymentNotFoundError, KubeAPIError
from hubview.models import (
    NOT_APPLICABLE,
    UNKNOWN,
    ClusterDeploymentInfo,
    CombinedClusterInfo,
    ManagedClusterInfo,
)
from hubview.observability import get_logger

from .cluster_deployments import ClusterDeploymentService
from .managed_clusters import ManagedClusterService

logger = get_logger(__name__)

DEFAULT_MAX_CONCURRENT_FETCHES = 10


def merge_found(info: CombinedClusterInfo, deployment: ClusterDeploymentInfo) -> CombinedClusterInfo:
    return info.model_copy(
        update={
            "power_state": deployment.power_state,
            "platform": deployment.platform,
            "region": deployment.region,
            "version": deployment.version,
            "api_url": deployment.api_url,
            "console_url": deployment.console_url,
            "kubeconfig_secret": deployment.kubeconfig_secret_ref,
        }
    )


def merge_placeholder(info: CombinedClusterInfo, placeholder: str) -> CombinedClusterInfo:
    return info.model_copy(
        update={
            "power_state": placeholder,
            "platform": placeholder,
            "region": placeholder,
            "version": placeholder,
            "api_url": "",
            "console_url": "",
            "kubeconfig_secret": "",
        }
    )


class CombinedClusterService:
    """Lists managed clusters enriched with ClusterDeployment data."""

    def __init__(
        self,
        managed_clusters: ManagedClusterService,
        cluster_deployments: ClusterDeploymentService,
        max_concurrent_fetches: int = DEFAULT_MAX_CONCURRENT_FETCHES,
    ):
        self.managed_clusters = managed_clusters
        self.cluster_deployments = cluster_deployments
        self.max_concurrent_fetches = max(1, max_concurrent_fetches)

    async def list_combined(self) -> list[CombinedClusterInfo]:
        """List every managed cluster with its ClusterDeployment details.

        The result has one entry per managed cluster, in listing order.

        Raises:
            KubeAPIError: If the managed cluster listing fails
        """
        managed = await self.managed_clusters.list_clusters()

        semaphore = asyncio.Semaphore(self.max_concurrent_fetches)
        combined = await asyncio.gather(
            *(self._combine(cluster, semaphore) for cluster in managed)
        )

        logger.debug("Combined cluster view built", count=len(combined))
        return list(combined)

    async def _combine(
        self,
        cluster: ManagedClusterInfo,
        semaphore: asyncio.Semaphore,
    ) -> CombinedClusterInfo:
        info = CombinedClusterInfo(
            name=cluster.name,
            status=cluster.status,
            available=cluster.available,
            message=cluster.message,
        )

        with structlog.contextvars.bound_contextvars(cluster=cluster.name):
            try:
                async with semaphore:
                    deployment = await self.cluster_deployments.get(cluster.name)
            except ClusterDeploymentNotFoundError:
                logger.debug("No ClusterDeployment for cluster")
                return merge_placeholder(info, NOT_APPLICABLE)
            except KubeAPIError as e:
                logger.warning(
                    "ClusterDeployment lookup failed",
                    error=str(e),
                    status=e.status,
                )
                return merge_placeholder(info, UNKNOWN)
            except Exception as e:
                # Client-side failures KubeClient does not translate
                logger.warning(
                    "ClusterDeployment lookup failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return merge_placeholder(info, UNKNOWN)

        return merge_found(info, deployment)
