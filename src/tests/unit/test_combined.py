"""Tests for the combined ManagedCluster and ClusterDeployment view."""

import asyncio

import pytest

from hubview.errors import ClusterDeploymentNotFoundError, KubeAPIError
from hubview.models import ClusterDeploymentInfo, ClusterStatus, ManagedClusterInfo
from hubview.services import CombinedClusterService
from hubview.services.cluster_deployments import parse_cluster_deployment


class FakeManagedClusters:
    def __init__(self, clusters=None, error=None):
        self.clusters = clusters or []
        self.error = error

    async def list_clusters(self):
        if self.error:
            raise self.error
        return list(self.clusters)


class FakeClusterDeployments:
    """Returns or raises per cluster name and records peak concurrency."""

    def __init__(self, outcomes, delay=0.0):
        self.outcomes = outcomes
        self.delay = delay
        self.active = 0
        self.peak = 0
        self.calls = []

    async def get(self, cluster_name):
        self.calls.append(cluster_name)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delay)
            outcome = self.outcomes.get(cluster_name)
            if outcome is None:
                raise ClusterDeploymentNotFoundError(cluster_name)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        finally:
            self.active -= 1


def managed(name, status=ClusterStatus.READY, available="True", message=""):
    return ManagedClusterInfo(name=name, status=status, available=available, message=message)


class TestListCombined:
    async def test_found_not_found_and_failed(self, cluster_deployment):
        clusters = [
            managed("c1", ClusterStatus.NOT_READY, "False", "Lease expired"),
            managed("c2"),
            managed("c3"),
        ]
        deployments = FakeClusterDeployments(
            {
                "c1": parse_cluster_deployment(cluster_deployment("c1", platform="gcp", region="europe-west1")),
                "c2": KubeAPIError("forbidden", status=403),
            }
        )
        service = CombinedClusterService(FakeManagedClusters(clusters), deployments)

        result = await service.list_combined()

        assert [c.name for c in result] == ["c1", "c2", "c3"]

        c1, c2, c3 = result
        assert c1.status == "NotReady"
        assert c1.available == "False"
        assert c1.message == "Lease expired"
        assert c1.power_state == "Running"
        assert c1.platform == "gcp"
        assert c1.region == "europe-west1"
        assert c1.version == "4.16.3"
        assert c1.api_url == "https://api.c1.example.com:6443"
        assert c1.kubeconfig_secret == "c1/c1-admin-kubeconfig"

        for field in ("power_state", "platform", "region", "version"):
            assert getattr(c2, field) == "Unknown"
            assert getattr(c3, field) == "N/A"
        for cluster in (c2, c3):
            assert cluster.api_url == ""
            assert cluster.console_url == ""
            assert cluster.kubeconfig_secret == ""
            assert cluster.status == "Ready"

    async def test_unexpected_error_only_affects_its_cluster(self, cluster_deployment, captured_logs):
        deployments = FakeClusterDeployments(
            {
                "a": RuntimeError("exec credential plugin failed"),
                "b": parse_cluster_deployment(cluster_deployment("b")),
            }
        )
        service = CombinedClusterService(
            FakeManagedClusters([managed("a"), managed("b"), managed("c")]),
            deployments,
        )

        a, b, c = await service.list_combined()

        assert (a.power_state, a.platform, a.region, a.version) == ("Unknown", "Unknown", "Unknown", "Unknown")
        assert a.kubeconfig_secret == ""
        assert b.power_state == "Running"
        assert c.power_state == "N/A"
        warnings = [e for e in captured_logs if e["log_level"] == "warning"]
        assert [w["error_type"] for w in warnings] == ["RuntimeError"]

    async def test_lookup_failure_is_logged(self, captured_logs):
        service = CombinedClusterService(
            FakeManagedClusters([managed("c2")]),
            FakeClusterDeployments({"c2": KubeAPIError("forbidden", status=403)}),
        )

        await service.list_combined()

        warnings = [e for e in captured_logs if e["log_level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["event"] == "ClusterDeployment lookup failed"
        assert warnings[0]["status"] == 403

    async def test_imported_cluster_without_deployment(self):
        """c3 is imported, not provisioned by Hive."""
        service = CombinedClusterService(
            FakeManagedClusters([managed("c3")]),
            FakeClusterDeployments({}),
        )

        (c3,) = await service.list_combined()

        assert (c3.power_state, c3.platform, c3.region, c3.version) == ("N/A", "N/A", "N/A", "N/A")

    async def test_missing_secret_ref_leaves_empty_secret(self):
        deployment = ClusterDeploymentInfo(name="c1", namespace="c1", power_state="Running")
        service = CombinedClusterService(
            FakeManagedClusters([managed("c1")]),
            FakeClusterDeployments({"c1": deployment}),
        )

        (c1,) = await service.list_combined()

        assert c1.kubeconfig_secret == ""
        assert c1.power_state == "Running"

    async def test_empty_fleet(self):
        deployments = FakeClusterDeployments({})
        service = CombinedClusterService(FakeManagedClusters([]), deployments)

        assert await service.list_combined() == []
        assert deployments.calls == []

    async def test_listing_failure_propagates(self):
        deployments = FakeClusterDeployments({})
        service = CombinedClusterService(
            FakeManagedClusters(error=KubeAPIError("failed to list managed clusters: boom")),
            deployments,
        )

        with pytest.raises(KubeAPIError, match="failed to list managed clusters"):
            await service.list_combined()
        assert deployments.calls == []

    async def test_order_preserved_with_uneven_latency(self, cluster_deployment):
        class SlowFirst(FakeClusterDeployments):
            async def get(self, cluster_name):
                if cluster_name == "a":
                    await asyncio.sleep(0.05)
                return await super().get(cluster_name)

        names = ["a", "b", "c", "d"]
        outcomes = {n: parse_cluster_deployment(cluster_deployment(n)) for n in names}
        service = CombinedClusterService(
            FakeManagedClusters([managed(n) for n in names]),
            SlowFirst(outcomes),
        )

        result = await service.list_combined()

        assert [c.name for c in result] == names

    async def test_every_cluster_is_looked_up_once(self):
        names = [f"spoke-{i}" for i in range(25)]
        deployments = FakeClusterDeployments({})
        service = CombinedClusterService(
            FakeManagedClusters([managed(n) for n in names]),
            deployments,
        )

        result = await service.list_combined()

        assert len(result) == 25
        assert sorted(deployments.calls) == sorted(names)

    async def test_concurrency_is_bounded(self):
        names = [f"spoke-{i}" for i in range(20)]
        deployments = FakeClusterDeployments({}, delay=0.01)
        service = CombinedClusterService(
            FakeManagedClusters([managed(n) for n in names]),
            deployments,
            max_concurrent_fetches=3,
        )

        await service.list_combined()

        assert 1 <= deployments.peak <= 3

    def test_concurrency_limit_is_at_least_one(self):
        service = CombinedClusterService(
            FakeManagedClusters(),
            FakeClusterDeployments({}),
            max_concurrent_fetches=0,
        )

        assert service.max_concurrent_fetches == 1
