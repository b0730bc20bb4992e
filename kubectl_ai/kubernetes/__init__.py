"""
Cluster access for kubectl-ai.
"""

from kubectl_ai.kubernetes.apply import KubeOptions, KubectlApplier

__all__ = ["KubeOptions", "KubectlApplier"]
