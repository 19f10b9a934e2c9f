"""Cluster domain models.

Two groups of models live here:
- Wire models parsed from hub API documents (ManagedCluster)
- Flattened views handed to the output layer
"""

from enum import Enum
from typing import Any

from pydantic import Field, model_validator

from .base import HubviewBaseModel, WireModel

# Placeholder values for provisioning fields that carry no real data.
# NOT_APPLICABLE: the cluster has no ClusterDeployment at all.
# UNKNOWN: the value exists in principle but could not be determined.
NOT_APPLICABLE = "N/A"
UNKNOWN = "Unknown"


class ClusterStatus(str, Enum):
    """Overall managed cluster status."""

    READY = "Ready"
    NOT_READY = "NotReady"
    UNKNOWN = "Unknown"


class ConditionStatus(str, Enum):
    """Value of a Kubernetes status condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


# Wire models


class _NullTolerantModel(WireModel):
    """Treats explicit nulls as absent so field defaults apply."""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ObjectMeta(_NullTolerantModel):
    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = Field(default_factory=dict)


class Taint(_NullTolerantModel):
    key: str = ""
    value: str = ""
    effect: str = ""


class Condition(_NullTolerantModel):
    type: str = ""
    status: str = ""
    reason: str = ""
    message: str = ""


class ManagedClusterSpec(_NullTolerantModel):
    taints: list[Taint] = Field(default_factory=list)


class ManagedClusterStatus(_NullTolerantModel):
    conditions: list[Condition] = Field(default_factory=list)


class ManagedCluster(_NullTolerantModel):
    """An ACM ManagedCluster as returned by the hub API."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ManagedClusterSpec = Field(default_factory=ManagedClusterSpec)
    status: ManagedClusterStatus = Field(default_factory=ManagedClusterStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    def find_condition(self, condition_type: str) -> Condition | None:
        """Return the first condition of the given type.

        Duplicate condition types are not expected from the API; when they
        occur the earliest entry is authoritative.
        """
        for condition in self.status.conditions:
            if condition.type == condition_type:
                return condition
        return None


# Views


class ManagedClusterInfo(HubviewBaseModel):
    """Summary of a managed cluster."""

    name: str
    status: ClusterStatus = ClusterStatus.UNKNOWN
    available: str = Field(default=UNKNOWN, description="Raw Available condition value")
    message: str = Field(default="", description="Available condition message")


class ManagedClusterFilter(HubviewBaseModel):
    """Criteria for filtering managed clusters.

    An unset status matches everything. A value that is not a known status
    is kept as-is and matches nothing.
    """

    status: ClusterStatus | str | None = None


class ClusterDeploymentInfo(HubviewBaseModel):
    """Fields read from a Hive ClusterDeployment."""

    name: str = ""
    namespace: str = ""
    power_state: str = ""
    installed: bool = False
    api_url: str = ""
    console_url: str = ""
    kubeconfig_secret_name: str = ""
    kubeconfig_secret_namespace: str = ""
    platform: str = ""
    region: str = ""
    version: str = ""

    @property
    def kubeconfig_secret_ref(self) -> str:
        """``namespace/name`` of the admin kubeconfig secret, empty if unset."""
        if not self.kubeconfig_secret_name:
            return ""
        return f"{self.kubeconfig_secret_namespace}/{self.kubeconfig_secret_name}"


class CombinedClusterInfo(HubviewBaseModel):
    """ManagedCluster status merged with ClusterDeployment details."""

    name: str
    status: ClusterStatus = ClusterStatus.UNKNOWN
    power_state: str = ""
    platform: str = ""
    region: str = ""
    version: str = ""
    api_url: str = ""
    console_url: str = ""
    available: str = UNKNOWN
    kubeconfig_secret: str = Field(default="", description="namespace/name of the admin kubeconfig secret")
    message: str = ""
