"""CLI entry point for the Agelum test runner.

Usage:
    agelum-runner --repo <repo> navigate <test_id> [options]
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from .config import RunnerConfig, load_config
from .reporting.console_reporter import ExecutionReporter
from .reporting.json_reporter import JsonReporter
from .runner.executor import RunInProgressError, TestRunOrchestrator
from .runner.process import ProcessRunner
from .runner.step_executor import StepExecutor
from .steps.schema import FailurePolicy, RunStatus
from .transport.errors import StepSourceError, TransportError
from .transport.http_client import StepSourceClient

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def _client(ctx: click.Context) -> StepSourceClient:
    config: RunnerConfig = ctx.obj
    if not config.repo:
        raise click.UsageError(
            "--repo is required (or set AGELUM_REPO / 'repo' in the config file)",
            ctx=ctx,
        )
    return StepSourceClient(
        base_url=config.base_url,
        repo=config.repo,
        request_timeout=config.request_timeout,
    )


def _remote_failure(action: str, error: StepSourceError) -> None:
    if isinstance(error, TransportError):
        click.echo(f"Error {action}: connection failed: {error}", err=True)
    else:
        click.echo(f"Error {action}: {error}", err=True)
        body = getattr(error, "body", None)
        if body:
            click.echo(body, err=True)
    sys.exit(1)


@click.group()
@click.option("--url", help="Base URL of the Agelum server.")
@click.option("--repo", help="Repository the tests belong to.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (default: ~/.agelum/config.yaml).",
)
@click.option("--browser-bin", help="Browser automation executable.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(
    ctx: click.Context,
    url: Optional[str],
    repo: Optional[str],
    config_path: Optional[Path],
    browser_bin: Optional[str],
    verbose: bool,
):
    """Run and manage remotely defined browser tests."""
    configure_logging(verbose)
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    ctx.obj = config.with_overrides(
        base_url=url,
        repo=repo,
        browser_binary=browser_bin,
    )
    logger.debug("Using config: %s", ctx.obj)


@main.command()
@click.argument("test_id")
@click.option(
    "--report",
    is_flag=True,
    help="Record the final status on the server when the run ends.",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Stop at the first failed step instead of running the rest.",
)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON summary.")
@click.pass_context
def navigate(ctx: click.Context, test_id: str, report: bool, fail_fast: bool, as_json: bool):
    """Fetch the steps of TEST_ID and execute them in order."""
    config: RunnerConfig = ctx.obj
    policy = FailurePolicy.STOP_ON_FAILURE if fail_fast else config.failure_policy

    with _client(ctx) as client:
        reporter = ExecutionReporter(
            finish_sink=client if report else None,
            # progress and child output go to stderr; stdout holds only the JSON
            out=sys.stderr if as_json else None,
        )
        orchestrator = TestRunOrchestrator(
            source=client,
            step_executor=StepExecutor(ProcessRunner(
                config.browser_binary,
                stdout=sys.stderr if as_json else None,
            )),
            reporter=reporter,
            failure_policy=policy,
        )

        try:
            summary = orchestrator.run(test_id)
        except KeyboardInterrupt:
            click.echo(f"\nTest {test_id} interrupted by user", err=True)
            sys.exit(130)
        except RunInProgressError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    if as_json:
        reporter_json = JsonReporter()
        click.echo(reporter_json.to_json_string(
            reporter_json.generate_cli_output(summary), pretty=False
        ))

    if summary.final_status == RunStatus.FAILED:
        sys.exit(1)


@main.command()
@click.argument("test_id")
@click.pass_context
def steps(ctx: click.Context, test_id: str):
    """List the steps of TEST_ID."""
    with _client(ctx) as client:
        try:
            test_steps = client.fetch_steps(test_id)
        except StepSourceError as e:
            _remote_failure("fetching test steps", e)

    if not test_steps:
        click.echo(f"No steps found for test {test_id}")
        return

    click.echo(f"Test Steps for {test_id}:")
    for step in test_steps:
        click.echo(f"  {step.order}) {step.describe()}")


@main.command("add-step", context_settings={"ignore_unknown_options": True})
@click.argument("test_id")
@click.option("--command", "step_command", required=True, help="Automation command.")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def add_step(ctx: click.Context, test_id: str, step_command: str, args: tuple[str, ...]):
    """Append a step to TEST_ID."""
    with _client(ctx) as client:
        try:
            client.add_step(test_id, step_command, list(args))
        except StepSourceError as e:
            _remote_failure("adding test step", e)

    click.echo("✓ Test step added successfully")


@main.command()
@click.argument("test_id")
@click.pass_context
def start(ctx: click.Context, test_id: str):
    """Mark a run of TEST_ID as started on the server."""
    with _client(ctx) as client:
        try:
            client.start_run(test_id)
        except StepSourceError as e:
            _remote_failure("running test", e)

    click.echo("✓ Test started successfully")


@main.command()
@click.argument("test_id")
@click.option("--status", required=True, help="Terminal status, e.g. passed or failed.")
@click.option("--error", "error_text", help="Error description.")
@click.pass_context
def finish(ctx: click.Context, test_id: str, status: str, error_text: Optional[str]):
    """Record the terminal status of a run of TEST_ID."""
    with _client(ctx) as client:
        try:
            client.report_finish(test_id, status, error_text)
        except StepSourceError as e:
            _remote_failure("finishing test", e)

    click.echo(f"✓ Test finished with status: {status}")


@main.command()
@click.argument("test_id")
@click.option("--last", default=5, show_default=True, type=click.IntRange(min=1))
@click.pass_context
def executions(ctx: click.Context, test_id: str, last: int):
    """Show the most recent executions of TEST_ID."""
    with _client(ctx) as client:
        try:
            records = client.list_executions(test_id, last)
        except StepSourceError as e:
            _remote_failure("fetching test executions", e)

    if not records:
        click.echo(f"No executions found for test {test_id}")
        return

    click.echo(f"Test Executions for {test_id}:")
    for record in records:
        click.echo(f"  {record}")


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def browser(ctx: click.Context, args: tuple[str, ...]):
    """Pass ARGS straight through to the automation executable."""
    config: RunnerConfig = ctx.obj
    outcome = ProcessRunner(config.browser_binary).run(list(args))

    if not outcome.success:
        click.echo(outcome.diagnostic, err=True)
        sys.exit(outcome.exit_code if outcome.launched else 127)


if __name__ == "__main__":
    main()
