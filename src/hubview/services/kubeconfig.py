"""Admin kubeconfig extraction for spoke clusters.

Steps:
1. Get the ClusterDeployment (namespace = name = cluster name)
2. Read spec.clusterMetadata.adminKubeconfigSecretRef.name
3. Get that Secret from the cluster's namespace
4. Take data["kubeconfig"]
5. Remove an extra base64 layer if one was applied on top of the API's own
6. Check the result looks like a kubeconfig

The extracted kubeconfig grants cluster-admin on the spoke. It is never
cached, and files are written readable by the owner only.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import os
from pathlib import Path

from hubview.errors import (
    InvalidKubeconfigError,
    KubeAPIError,
    KubeconfigSecretNotFoundError,
    KubeconfigWriteError,
    ResourceNotFoundError,
    SpokeNotProvisionedError,
)
from hubview.kube import CLUSTER_DEPLOYMENTS, KubeClient
from hubview.observability import get_logger

from .cluster_deployments import admin_kubeconfig_secret_name

logger = get_logger(__name__)

KUBECONFIG_SECRET_KEY = "kubeconfig"
KUBECONFIG_FILE_MODE = 0o600

# Top-level keys every kubeconfig carries
_API_VERSION_MARKER = b"apiVersion:"
_KIND_MARKER = b"kind:"


def normalize_kubeconfig(data: bytes) -> bytes:
    """Return the kubeconfig text, decoding one extra base64 layer if present.

    Data that already starts with ``apiVersion:`` is returned unchanged. Other
    data is decoded as base64 when it is valid base64; otherwise it is
    returned unchanged and left for validation to judge.
    """
    if data.strip().startswith(_API_VERSION_MARKER):
        return data

    try:
        return base64.b64decode(data.replace(b"\r", b"").replace(b"\n", b""), validate=True)
    except (binascii.Error, ValueError):
        return data


def is_kubeconfig(data: bytes) -> bool:
    return _API_VERSION_MARKER in data and _KIND_MARKER in data


class KubeconfigExtractor:
    """Extracts the admin kubeconfig of a Hive-provisioned spoke cluster."""

    def __init__(self, kube: KubeClient):
        self.kube = kube

    async def extract(self, cluster_name: str) -> bytes:
        """Return the admin kubeconfig for a spoke cluster.

        Raises:
            SpokeNotProvisionedError: No ClusterDeployment or no secret reference
            KubeconfigSecretNotFoundError: The referenced secret does not exist
            InvalidKubeconfigError: The secret holds no usable kubeconfig
            KubeAPIError: Authorization or connectivity failures
        """
        try:
            deployment = await asyncio.to_thread(
                self.kube.get_namespaced_object,
                CLUSTER_DEPLOYMENTS,
                cluster_name,
                cluster_name,
            )
        except ResourceNotFoundError as e:
            raise SpokeNotProvisionedError(
                f"ClusterDeployment {cluster_name} not found in namespace {cluster_name} "
                "(cluster not found or not managed by Hive)"
            ) from e
        except KubeAPIError as e:
            raise KubeAPIError(
                f"failed to get ClusterDeployment {cluster_name}: {e}",
                status=e.status,
            ) from e

        spec = deployment.get("spec")
        secret_name = admin_kubeconfig_secret_name(spec if isinstance(spec, dict) else {})
        if not secret_name:
            raise SpokeNotProvisionedError(
                f"ClusterDeployment {cluster_name} has no "
                "spec.clusterMetadata.adminKubeconfigSecretRef.name"
            )

        secret_ref = f"{cluster_name}/{secret_name}"
        try:
            secret_data = await asyncio.to_thread(
                self.kube.read_secret_data, cluster_name, secret_name
            )
        except ResourceNotFoundError as e:
            raise KubeconfigSecretNotFoundError(
                f"admin kubeconfig secret {secret_ref} for cluster {cluster_name} not found"
            ) from e
        except KubeAPIError as e:
            raise KubeAPIError(
                f"failed to get admin kubeconfig secret {secret_ref}: {e}",
                status=e.status,
            ) from e

        if KUBECONFIG_SECRET_KEY not in secret_data:
            raise InvalidKubeconfigError(
                f"{KUBECONFIG_SECRET_KEY} key not found in secret {secret_ref}"
            )

        raw = secret_data[KUBECONFIG_SECRET_KEY]
        if not raw:
            raise InvalidKubeconfigError(
                f"{KUBECONFIG_SECRET_KEY} data is empty in secret {secret_ref}"
            )

        kubeconfig = normalize_kubeconfig(raw)
        if not is_kubeconfig(kubeconfig):
            raise InvalidKubeconfigError(
                f"kubeconfig validation failed for secret {secret_ref}: "
                "missing required YAML fields (apiVersion, kind)"
            )

        logger.info("Extracted admin kubeconfig", cluster=cluster_name, secret=secret_ref)
        return kubeconfig

    async def extract_to_file(self, cluster_name: str, output_path: str | Path) -> Path:
        """Extract the admin kubeconfig and write it with mode 0600.

        Parent directories are created as needed. An existing file is
        overwritten and its permissions reset to 0600.

        Returns:
            The path written
        """
        kubeconfig = await self.extract(cluster_name)

        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise KubeconfigWriteError(f"failed to create directory {path.parent}: {e}") from e

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, KUBECONFIG_FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                # os.open only applies the mode to new files
                os.fchmod(f.fileno(), KUBECONFIG_FILE_MODE)
                f.write(kubeconfig)
        except OSError as e:
            raise KubeconfigWriteError(f"failed to write kubeconfig to {path}: {e}") from e

        logger.info("Wrote admin kubeconfig", cluster=cluster_name, path=str(path))
        return path
