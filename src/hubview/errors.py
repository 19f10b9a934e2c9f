"""Exception hierarchy shared by all hubview layers."""

from __future__ import annotations


class HubviewError(Exception):
    """Base class for every error raised by hubview."""


class ConfigError(HubviewError):
    """Raised when the configuration file cannot be read or is invalid."""


class KubeConfigError(HubviewError):
    """Raised when a kubeconfig cannot be loaded for the hub connection."""


class KubeAPIError(HubviewError):
    """Raised when a call to the Kubernetes API fails.

    Attributes:
        status: HTTP status returned by the API server, if any
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ResourceNotFoundError(KubeAPIError):
    """Raised when a targeted get finds no such object."""

    def __init__(self, message: str):
        super().__init__(message, status=404)


class ClusterDeploymentNotFoundError(ResourceNotFoundError):
    """Raised when a cluster has no ClusterDeployment in its namespace."""

    def __init__(self, cluster_name: str):
        super().__init__(f"ClusterDeployment {cluster_name} not found in namespace {cluster_name}")
        self.cluster_name = cluster_name


class ClusterConversionError(HubviewError):
    """Raised when a ManagedCluster document does not match the expected shape."""


class KubeconfigError(HubviewError):
    """Base class for admin kubeconfig extraction failures."""


class SpokeNotProvisionedError(KubeconfigError):
    """Raised when a cluster has no ClusterDeployment or no kubeconfig reference."""


class KubeconfigSecretNotFoundError(KubeconfigError):
    """Raised when the referenced admin kubeconfig secret does not exist."""


class InvalidKubeconfigError(KubeconfigError):
    """Raised when the secret payload is missing, empty or not a kubeconfig."""


class KubeconfigWriteError(KubeconfigError):
    """Raised when the extracted kubeconfig cannot be written to disk."""
