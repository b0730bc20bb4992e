"""
Command-line interface for kubectl-ai.

Main entry point for the kubectl-ai CLI application.
"""
import logging
from typing import List, Optional

import typer

from kubectl_ai import __version__
from kubectl_ai.config import load_config
from kubectl_ai.console import get_console
from kubectl_ai.errors import ConfigurationError, KubectlAIError
from kubectl_ai.kubernetes import KubeOptions, KubectlApplier
from kubectl_ai.llm import PromptRequest, build_completion_client
from kubectl_ai.pipeline import Pipeline, RunOutcome
from kubectl_ai.ui import RichSelector
from kubectl_ai.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

app = typer.Typer(
    name="kubectl-ai",
    help="Generate Kubernetes manifests from natural language and apply them to the current cluster.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        typer.echo(f"kubectl-ai version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    prompt: Optional[List[str]] = typer.Argument(
        None, help="What the manifest should do, e.g. 'create an nginx deployment with 3 replicas'", show_default=False
    ),
    openai_deployment_name: Optional[str] = typer.Option(
        None, "--openai-deployment-name",
        help="The deployment name used for the model in OpenAI service. [env: OPENAI_DEPLOYMENT_NAME; default: text-davinci-003]",
    ),
    openai_api_key: Optional[str] = typer.Option(
        None, "--openai-api-key",
        help="The API key for the OpenAI service. This is required. [env: OPENAI_API_KEY]",
    ),
    azure_openai_endpoint: Optional[str] = typer.Option(
        None, "--azure-openai-endpoint",
        help="The endpoint for Azure OpenAI service. If provided, Azure OpenAI service will be used instead of OpenAI service. [env: AZURE_OPENAI_ENDPOINT]",
    ),
    azure_openai_api_version: Optional[str] = typer.Option(
        None, "--azure-openai-api-version",
        help="API version for the Azure OpenAI service. [env: AZURE_OPENAI_API_VERSION]",
    ),
    require_confirmation: Optional[bool] = typer.Option(
        None, "--require-confirmation/--no-require-confirmation",
        help="Whether to require confirmation before applying the manifest. [env: REQUIRE_CONFIRMATION; default: true]",
        show_default=False,
    ),
    temperature: Optional[float] = typer.Option(
        None, "--temperature",
        help="The temperature to use for the model. Range is between 0 and 1. Set closer to 0 if you want output to be more deterministic but less creative. [env: TEMPERATURE; default: 0.0]",
    ),
    max_tokens: Optional[int] = typer.Option(
        None, "--max-tokens", help="Maximum number of tokens to generate. [env: MAX_TOKENS; default: 3000]"
    ),
    openai_request_timeout: Optional[float] = typer.Option(
        None, "--openai-request-timeout", help="Timeout for the completion request in seconds. [env: OPENAI_REQUEST_TIMEOUT]"
    ),
    kubeconfig: Optional[str] = typer.Option(None, "--kubeconfig", help="Path to the kubeconfig file to use for CLI requests."),
    context: Optional[str] = typer.Option(None, "--context", help="The name of the kubeconfig context to use"),
    cluster: Optional[str] = typer.Option(None, "--cluster", help="The name of the kubeconfig cluster to use"),
    user: Optional[str] = typer.Option(None, "--user", help="The name of the kubeconfig user to use"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="If present, the namespace scope for this CLI request"),
    server: Optional[str] = typer.Option(None, "--server", "-s", help="The address and port of the Kubernetes API server"),
    token: Optional[str] = typer.Option(None, "--token", help="Bearer token for authentication to the API server"),
    impersonate: Optional[str] = typer.Option(None, "--as", help="Username to impersonate for the operation."),
    impersonate_groups: Optional[List[str]] = typer.Option(None, "--as-group", help="Group to impersonate for the operation, this flag can be repeated to specify multiple groups."),
    impersonate_uid: Optional[str] = typer.Option(None, "--as-uid", help="UID to impersonate for the operation."),
    certificate_authority: Optional[str] = typer.Option(None, "--certificate-authority", help="Path to a cert file for the certificate authority"),
    client_certificate: Optional[str] = typer.Option(None, "--client-certificate", help="Path to a client certificate file for TLS"),
    client_key: Optional[str] = typer.Option(None, "--client-key", help="Path to a client key file for TLS"),
    insecure_skip_tls_verify: bool = typer.Option(False, "--insecure-skip-tls-verify", help="If true, the server's certificate will not be checked for validity."),
    tls_server_name: Optional[str] = typer.Option(None, "--tls-server-name", help="Server name to use for server certificate validation."),
    request_timeout: Optional[str] = typer.Option(None, "--request-timeout", help="The length of time to wait before giving up on a single server request."),
    cache_dir: Optional[str] = typer.Option(None, "--cache-dir", help="Default cache directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline steps and kubectl invocations to stderr"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Generate a Kubernetes manifest from PROMPT and apply it after confirmation."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        config = load_config(
            openai_deployment_name=openai_deployment_name,
            openai_api_key=openai_api_key,
            azure_openai_endpoint=azure_openai_endpoint,
            azure_openai_api_version=azure_openai_api_version,
            require_confirmation=require_confirmation,
            temperature=temperature,
            max_tokens=max_tokens,
            openai_request_timeout=openai_request_timeout,
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    try:
        request = PromptRequest.from_args(prompt or [])
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="PROMPT")

    kube_options = KubeOptions(
        kubeconfig=kubeconfig,
        context=context,
        cluster=cluster,
        user=user,
        namespace=namespace,
        server=server,
        token=token,
        impersonate=impersonate,
        impersonate_uid=impersonate_uid,
        impersonate_groups=tuple(impersonate_groups or ()),
        certificate_authority=certificate_authority,
        client_certificate=client_certificate,
        client_key=client_key,
        insecure_skip_tls_verify=insecure_skip_tls_verify,
        tls_server_name=tls_server_name,
        request_timeout=request_timeout,
        cache_dir=cache_dir,
    )

    console = get_console()
    try:
        client = build_completion_client(config)
        pipeline = Pipeline(
            config,
            client,
            selector=RichSelector(console),
            applier=KubectlApplier(kube_options),
            console=console,
        )
        outcome = pipeline.run(request)
    except KubectlAIError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo("Error: interrupted", err=True)
        raise typer.Exit(1)

    logger.debug("run.finished", outcome=outcome.value)
    if outcome == RunOutcome.SKIPPED:
        console.print("[dim]Manifest not applied.[/dim]")


if __name__ == "__main__":
    app()
