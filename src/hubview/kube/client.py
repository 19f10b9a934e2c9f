"""Kubernetes API access for the hub cluster.

Wraps the official client behind the three calls the services need:
listing cluster-scoped custom objects, getting a namespaced custom object,
and reading a secret. API failures are translated into hubview errors so the
services never see ApiException directly; a 404 on a targeted get becomes a
ResourceNotFoundError.

All calls block. Async callers run them in a worker thread.
"""

from __future__ import annotations

import base64
import os
import time
from collections.abc import Callable
from typing import Any

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError as TransportError

from hubview.errors import KubeAPIError, KubeConfigError, ResourceNotFoundError
from hubview.observability import get_logger, log_api_call_end, log_api_call_start

from .resources import GroupVersionResource

logger = get_logger(__name__)


class KubeClient:
    """Read-only client for custom resources and secrets on the hub."""

    def __init__(self, api_client: client.ApiClient):
        self._api_client = api_client
        self._custom_objects = client.CustomObjectsApi(api_client)
        self._core = client.CoreV1Api(api_client)

    @classmethod
    def from_kubeconfig(cls, kubeconfig_path: str, context: str | None = None) -> KubeClient:
        """Build a client from a kubeconfig file.

        Args:
            kubeconfig_path: Path to the hub kubeconfig
            context: Context to use; the file's current context when empty

        Raises:
            KubeConfigError: If the path is empty, missing or cannot be loaded
        """
        if not kubeconfig_path:
            raise KubeConfigError("kubeconfig path cannot be empty")

        if not os.path.exists(kubeconfig_path):
            raise KubeConfigError(f"kubeconfig file not found: {kubeconfig_path}")

        try:
            # Isolated ApiClient; the global default configuration is untouched
            api_client = config.new_client_from_config(
                config_file=kubeconfig_path,
                context=context or None,
            )
        except (config.ConfigException, OSError) as e:
            raise KubeConfigError(f"failed to build client config: {e}") from e

        logger.debug("Kubernetes client created", kubeconfig=kubeconfig_path, context=context)
        return cls(api_client)

    def list_cluster_objects(self, resource: GroupVersionResource) -> list[dict[str, Any]]:
        """List all cluster-scoped objects of a custom resource."""
        result = self._call(
            "list",
            str(resource),
            self._custom_objects.list_cluster_custom_object,
            group=resource.group,
            version=resource.version,
            plural=resource.plural,
        )
        return list(result.get("items") or [])

    def get_namespaced_object(
        self,
        resource: GroupVersionResource,
        namespace: str,
        name: str,
    ) -> dict[str, Any]:
        """Get one namespaced custom object.

        Raises:
            ResourceNotFoundError: If the object does not exist
            KubeAPIError: For any other API or transport failure
        """
        return self._call(
            "get",
            f"{resource} {namespace}/{name}",
            self._custom_objects.get_namespaced_custom_object,
            group=resource.group,
            version=resource.version,
            namespace=namespace,
            plural=resource.plural,
            name=name,
        )

    def read_secret_data(self, namespace: str, name: str) -> dict[str, bytes]:
        """Read a secret and return its data with the API's base64 layer removed.

        Raises:
            ResourceNotFoundError: If the secret does not exist
            KubeAPIError: For any other API or transport failure
        """
        secret = self._call(
            "get",
            f"secret {namespace}/{name}",
            self._core.read_namespaced_secret,
            name=name,
            namespace=namespace,
        )
        data = secret.data or {}
        return {key: base64.b64decode(value or "") for key, value in data.items()}

    def _call(self, operation: str, target: str, func: Callable[..., Any], **kwargs: Any) -> Any:
        log_api_call_start(logger, operation, target)
        start = time.perf_counter()

        try:
            result = func(**kwargs)
        except ApiException as e:
            duration_ms = (time.perf_counter() - start) * 1000
            log_api_call_end(logger, operation, target, False, duration_ms, error=str(e.reason))
            if e.status == 404:
                raise ResourceNotFoundError(f"failed to {operation} {target}: not found") from e
            raise KubeAPIError(
                f"failed to {operation} {target}: {e.status} {e.reason}",
                status=e.status,
            ) from e
        except TransportError as e:
            duration_ms = (time.perf_counter() - start) * 1000
            log_api_call_end(logger, operation, target, False, duration_ms, error=str(e))
            raise KubeAPIError(f"failed to {operation} {target}: {e}") from e

        duration_ms = (time.perf_counter() - start) * 1000
        log_api_call_end(logger, operation, target, True, duration_ms)
        return result
