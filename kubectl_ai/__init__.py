"""
kubectl-ai - natural language to Kubernetes manifests.

A command-line tool that asks an OpenAI (or Azure OpenAI) completion model to
write a Kubernetes manifest from a plain-English prompt and applies it to the
current cluster after confirmation.
"""

__version__ = "0.0.3"
__author__ = "kubectl-ai Contributors"
