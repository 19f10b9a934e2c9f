"""Pytest configuration and shared fixtures."""

import base64
import os
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from hubview.kube import KubeClient

SAMPLE_KUBECONFIG = b"""apiVersion: v1
kind: Config
clusters:
- cluster:
    server: https://api.spoke-1.example.com:6443
  name: spoke-1
contexts:
- context:
    cluster: spoke-1
    user: admin
  name: admin
current-context: admin
users:
- name: admin
  user:
    client-certificate-data: LS0tLS1CRUdJTi0tLS0t
"""


@pytest.fixture(autouse=True)
def clean_hubview_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep HUBVIEW_* variables from the developer shell out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("HUBVIEW_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def captured_logs():
    """Capture structured log events instead of rendering them."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def kube() -> MagicMock:
    """Mock Kubernetes client."""
    return MagicMock(spec=KubeClient)


@pytest.fixture
def sample_kubeconfig() -> bytes:
    return SAMPLE_KUBECONFIG


@pytest.fixture
def encoded_kubeconfig() -> bytes:
    """Sample kubeconfig with an extra base64 layer."""
    return base64.b64encode(SAMPLE_KUBECONFIG)


def _managed_cluster(
    name: str,
    available: str | None = "True",
    message: str = "",
    taints: tuple[str, ...] = (),
    extra_conditions: tuple[dict[str, Any], ...] = (),
) -> dict[str, Any]:
    conditions: list[dict[str, Any]] = list(extra_conditions)
    if available is not None:
        conditions.append(
            {
                "type": "ManagedClusterConditionAvailable",
                "status": available,
                "reason": "ManagedClusterAvailable",
                "message": message,
                "lastTransitionTime": "2025-01-10T08:00:00Z",
            }
        )
    return {
        "apiVersion": "cluster.open-cluster-management.io/v1",
        "kind": "ManagedCluster",
        "metadata": {"name": name, "labels": {"cloud": "Amazon"}},
        "spec": {
            "hubAcceptsClient": True,
            "taints": [
                {"key": key, "effect": "NoSelect", "timeAdded": "2025-01-10T08:00:00Z"}
                for key in taints
            ],
        },
        "status": {"conditions": conditions},
    }


def _cluster_deployment(
    name: str,
    platform: str = "aws",
    region: str = "us-east-1",
    power_state: str | None = "Running",
    version: str = "4.16.3",
    secret_name: str | None = "admin-kubeconfig",
) -> dict[str, Any]:
    spec: dict[str, Any] = {
        "baseDomain": "example.com",
        "clusterName": name,
        "installed": True,
    }
    if secret_name is not None:
        spec["clusterMetadata"] = {
            "clusterID": "0f4c1ba6-94d0-4d9b-a1b5-2f0c3c1b5b4e",
            "infraID": f"{name}-x7k2p",
            "adminKubeconfigSecretRef": {"name": f"{name}-{secret_name}"},
            "adminPasswordSecretRef": {"name": f"{name}-admin-password"},
        }
    status: dict[str, Any] = {
        "apiURL": f"https://api.{name}.example.com:6443",
        "webConsoleURL": f"https://console-openshift-console.apps.{name}.example.com",
        "installVersion": version,
    }
    if power_state is not None:
        status["powerState"] = power_state
    return {
        "apiVersion": "hive.openshift.io/v1",
        "kind": "ClusterDeployment",
        "metadata": {
            "name": name,
            "namespace": name,
            "labels": {
                "hive.openshift.io/cluster-platform": platform,
                "hive.openshift.io/cluster-region": region,
            },
        },
        "spec": spec,
        "status": status,
    }


@pytest.fixture
def managed_cluster() -> Callable[..., dict[str, Any]]:
    """Factory for ManagedCluster API documents."""
    return _managed_cluster


@pytest.fixture
def cluster_deployment() -> Callable[..., dict[str, Any]]:
    """Factory for ClusterDeployment API documents."""
    return _cluster_deployment


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
