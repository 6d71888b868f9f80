"""bindeploy CLI."""

import logging
import signal
import uuid
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from bindeploy.config import get_config_template, load_config
from bindeploy.credentials import YamlCredentialStore
from bindeploy.deployer import BinaryDeployer
from bindeploy.errors import DeployError
from bindeploy.flatten import flatten as flatten_tree
from bindeploy.repository import create_repository
from bindeploy.tree import LocalFileNode
from bindeploy.types import ExecutionContext

app = typer.Typer(help="bindeploy - Publish build artifacts to a remote repository")
console = Console()

CONFIG_FILE = "bindeploy.yaml"


def setup_logging(verbose: bool = False):
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    for name in ("boto3", "botocore", "s3transfer", "urllib3", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_root(path: Path) -> LocalFileNode:
    """Get the artifact root, which must be an existing directory."""
    if not path.is_dir():
        console.print(f"[red]Error:[/red] {path} is not a directory.")
        raise typer.Exit(1)
    return LocalFileNode(path)


@app.command()
def init():
    """Write a configuration template to the current directory."""
    config_file = Path(CONFIG_FILE)

    if config_file.exists():
        console.print(f"[yellow]Warning:[/yellow] {CONFIG_FILE} already exists.")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit(0)

    config_file.write_text(get_config_template())
    console.print("[green]Initialized bindeploy.[/green]")
    console.print(f"  Config: {CONFIG_FILE}")
    console.print(f"\nEdit {CONFIG_FILE} to point at your repository.")


@app.command()
def plan(
    path: Path = typer.Argument(..., help="Artifact directory"),
    flatten: bool = typer.Option(False, "--flatten/--no-flatten", help="Drop directory structure"),
):
    """List the files a deploy would upload, in upload order."""
    root = get_root(path)
    try:
        binaries = flatten_tree(root, flatten)
    except DeployError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not binaries:
        console.print("Nothing to deploy.")
        return

    table = Table()
    table.add_column("#")
    table.add_column("Destination")
    table.add_column("Size", justify="right")
    for index, binary in enumerate(binaries, start=1):
        size = binary.size
        table.add_row(str(index), binary.destination_name, "?" if size is None else str(size))
    console.print(table)

    names = [b.destination_name for b in binaries]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        console.print(f"[yellow]Warning:[/yellow] duplicate names, last one wins: {', '.join(duplicates)}")


@app.command()
def deploy(
    path: Path = typer.Argument(..., help="Artifact directory"),
    config_path: Path = typer.Option(Path(CONFIG_FILE), "--config", "-c", help="Config file"),
    scope: str = typer.Option("", "--scope", "-s", help="Credential scope (e.g. job name)"),
    run_id: str | None = typer.Option(None, "--run-id", help="Identifier for this deploy"),
    flatten: bool | None = typer.Option(
        None, "--flatten/--no-flatten", help="Override the flatten setting from the config"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Upload the artifact directory to the configured repository."""
    setup_logging(verbose)
    root = get_root(path)

    if not config_path.exists():
        console.print(f"[red]Error:[/red] {config_path} not found. Run 'bindeploy init' first.")
        raise typer.Exit(1)

    try:
        config = load_config(config_path)
    except (ValidationError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] Invalid config {config_path}:")
        console.print(str(e), markup=False)
        raise typer.Exit(1)

    if flatten is not None:
        config.flatten = flatten

    credentials = YamlCredentialStore(Path(config.credentials_file))
    repository = create_repository(config, credentials)
    deployer = BinaryDeployer(repository, flatten=config.flatten)
    ctx = ExecutionContext(run_id=run_id or uuid.uuid4().hex[:8], scope=scope)

    console.print(f"[green]Deploying {path}[/green]")
    console.print(f"  Repository: {config.repository.type}")
    console.print(f"  Run: {ctx.run_id}")

    def handle_interrupt(signum, frame):
        if ctx.cancelled:
            raise KeyboardInterrupt
        ctx.cancel()
        console.print(
            "\n[yellow]Interrupted.[/yellow] Waiting for in-flight uploads; press Ctrl-C again to abort."
        )

    previous_handler = signal.signal(signal.SIGINT, handle_interrupt)
    try:
        result = deployer.perform(root, ctx)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted.[/yellow]")
        raise typer.Exit(1)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    if result.failure is not None:
        failure = result.failure
        console.print(f"\n[red]Deployment failed[/red] ({failure.kind.value})")
        if failure.binary_name:
            console.print(f"  File: {failure.binary_name}")
        console.print(f"  Cause: {failure.status_line or failure.cause or failure}")
        console.print(f"  Uploaded before failure: {result.succeeded_count}")
        raise typer.Exit(1)

    console.print(f"\n[green]Deployed {result.succeeded_count} file(s).[/green]")


if __name__ == "__main__":
    app()
