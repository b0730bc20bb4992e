"""Apply generated manifests to the current cluster via kubectl.

Authentication and context resolution are delegated to kubectl and
~/.kube/config; cluster-selection flags are passed through unmodified.
"""

import signal
import subprocess
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from kubectl_ai.errors import ApplyError
from kubectl_ai.utils import run_command
from kubectl_ai.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def interrupts_ignored() -> Iterator[None]:
    """Ignore SIGINT while the block runs, then restore the previous handler."""
    try:
        previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
        installed = True
    except ValueError:
        # Signals can only be handled in the main thread
        installed = False

    try:
        yield
    finally:
        if installed:
            signal.signal(
                signal.SIGINT,
                previous if previous is not None else signal.default_int_handler,
            )


@dataclass(frozen=True)
class KubeOptions:
    """Cluster-context flags forwarded to kubectl.

    ``None`` (or an empty tuple) means the flag was not given and kubectl's
    own defaults apply.
    """

    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    cluster: Optional[str] = None
    user: Optional[str] = None
    namespace: Optional[str] = None
    server: Optional[str] = None
    token: Optional[str] = None
    impersonate: Optional[str] = None
    impersonate_uid: Optional[str] = None
    impersonate_groups: Tuple[str, ...] = field(default_factory=tuple)
    certificate_authority: Optional[str] = None
    client_certificate: Optional[str] = None
    client_key: Optional[str] = None
    insecure_skip_tls_verify: bool = False
    tls_server_name: Optional[str] = None
    request_timeout: Optional[str] = None
    cache_dir: Optional[str] = None

    def to_args(self) -> List[str]:
        """Render the options as kubectl global flags."""
        args: List[str] = []
        flags = [
            ("--kubeconfig", self.kubeconfig),
            ("--context", self.context),
            ("--cluster", self.cluster),
            ("--user", self.user),
            ("--namespace", self.namespace),
            ("--server", self.server),
            ("--token", self.token),
            ("--as", self.impersonate),
            ("--as-uid", self.impersonate_uid),
            ("--certificate-authority", self.certificate_authority),
            ("--client-certificate", self.client_certificate),
            ("--client-key", self.client_key),
            ("--tls-server-name", self.tls_server_name),
            ("--request-timeout", self.request_timeout),
            ("--cache-dir", self.cache_dir),
        ]
        for flag, value in flags:
            if value:
                args.append(f"{flag}={value}")

        for group in self.impersonate_groups:
            args.append(f"--as-group={group}")

        if self.insecure_skip_tls_verify:
            args.append("--insecure-skip-tls-verify=true")

        return args


class KubectlApplier:
    """Creates or updates resources with ``kubectl apply``."""

    def __init__(self, options: Optional[KubeOptions] = None, kubectl: str = "kubectl"):
        """Initialize the applier.

        Args:
            options: Cluster-context flags forwarded to kubectl
            kubectl: kubectl executable name or path
        """
        self.options = options or KubeOptions()
        self.kubectl = kubectl

    def build_command(self) -> List[str]:
        """Build the kubectl command line; the manifest is read from stdin."""
        return [self.kubectl, *self.options.to_args(), "apply", "-f", "-"]

    def apply(self, manifest: str) -> str:
        """Apply the manifest to the cluster.

        The manifest is not inspected; kubectl is the judge of its validity.
        Once kubectl starts it runs to completion: interrupts are ignored until
        it exits, and kubectl runs in its own session so a terminal Ctrl-C
        does not reach it.

        Args:
            manifest: YAML or JSON manifest text

        Returns:
            kubectl output describing the applied resources

        Raises:
            ApplyError: If kubectl is missing or rejects the manifest
        """
        cmd = self.build_command()
        try:
            with interrupts_ignored():
                result = run_command(
                    cmd, input=manifest, check=True, start_new_session=True
                )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise ApplyError(
                f"kubectl apply failed (exit code {e.returncode}): {stderr}"
            ) from e
        except FileNotFoundError as e:
            raise ApplyError(
                f"{self.kubectl} not found. Please install kubectl first."
            ) from e

        output = (result.stdout or "").strip()
        logger.debug("manifest.applied", output=output)
        return output
