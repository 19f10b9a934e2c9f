"""hubview package.

Read-only tooling for an ACM hub cluster:
- models: Pydantic data models for managed clusters and cluster deployments
- kube: Kubernetes API access (custom resources and secrets)
- services: status derivation, correlation and kubeconfig extraction
- config: Configuration management
- observability: Structured logging
"""

__version__ = "0.1.0"
