"""Commands for transforming messages into task launch requests."""

import sys
from dataclasses import asdict

import typer
from rich.markup import escape

from tasklaunch.cli.common.context import TransformAppContext, build_transform_context
from tasklaunch.cli.common.exits import die, exit_from_exc, ok_exit
from tasklaunch.cli.common.options import (
    ApplicationNameOpt,
    CommandLineArgumentsOpt,
    ConfirmOpt,
    DataSourceDriverClassNameOpt,
    DataSourcePasswordOpt,
    DataSourceUrlOpt,
    DataSourceUserNameOpt,
    DeploymentPropertiesOpt,
    EnvelopeOpt,
    EnvironmentPropertiesOpt,
    FailFastOpt,
    FormatOpt,
    ParallelOpt,
    UriOpt,
)
from tasklaunch.cli.common.output import OutputFormat, out
from tasklaunch.core.adapters.streams import LineMessageSink, LineMessageSource
from tasklaunch.core.builder import build_launch_request
from tasklaunch.core.config import env_var_name
from tasklaunch.core.errors import LaunchRequestError, MessageTransformationError
from tasklaunch.core.messages import Message
from tasklaunch.core.processor import process_messages

app = typer.Typer(
    help="Transform messages into task launch requests",
    no_args_is_help=False,
    invoke_without_command=True,
)

_MASK = "******"


@app.callback()
def _init(
    ctx: typer.Context,
    uri: str | None = UriOpt,
    application_name: str | None = ApplicationNameOpt,
    command_line_arguments: str | None = CommandLineArgumentsOpt,
    deployment_properties: str | None = DeploymentPropertiesOpt,
    environment_properties: str | None = EnvironmentPropertiesOpt,
    datasource_url: str | None = DataSourceUrlOpt,
    datasource_username: str | None = DataSourceUserNameOpt,
    datasource_password: str | None = DataSourcePasswordOpt,
    datasource_driver_class_name: str | None = DataSourceDriverClassNameOpt,
):
    """Resolve the transform configuration from options and environment."""
    ctx.obj = build_transform_context(
        uri=uri,
        application_name=application_name,
        command_line_arguments=command_line_arguments,
        deployment_properties=deployment_properties,
        environment_properties=environment_properties,
        data_source_url=datasource_url,
        data_source_user_name=datasource_username,
        data_source_password=datasource_password,
        data_source_driver_class_name=datasource_driver_class_name,
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def build(
    ctx: typer.Context,
    payload: str = typer.Argument("", help="Payload of the inbound message"),
    output_format: OutputFormat = FormatOpt,
    confirm: bool = ConfirmOpt,
):
    """
    Build the launch request for a single message.
    """
    appctx: TransformAppContext = ctx.obj

    try:
        request = build_launch_request(appctx.config, Message(payload=payload))
    except LaunchRequestError as exc:
        exit_from_exc(exc, message=escape(str(exc)), code=1)

    if confirm or output_format == OutputFormat.TABLE:
        out.request_table(request)

    if confirm and not out.confirm("Emit this launch request?"):
        ok_exit("Cancelled")

    if output_format == OutputFormat.JSON:
        typer.echo(request.to_json())


@app.command()
def stream(
    ctx: typer.Context,
    envelope: bool = EnvelopeOpt,
    parallel: int = ParallelOpt,
    fail_fast: bool = FailFastOpt,
):
    """
    Transform messages read line by line from stdin into launch requests on stdout.
    """
    appctx: TransformAppContext = ctx.obj

    if parallel < 1:
        die("--parallel must be >= 1", code=1)

    source = LineMessageSource(sys.stdin, envelope=envelope)
    sink = LineMessageSink(sys.stdout, envelope=envelope)

    try:
        results = process_messages(
            appctx.config,
            source,
            sink,
            fail_fast=fail_fast,
            max_parallel=parallel,
        )
    except MessageTransformationError as exc:
        exit_from_exc(exc, message=escape(f"Message rejected: {exc.cause}"), code=1)
    except ValueError as exc:
        exit_from_exc(exc, message=escape(str(exc)), code=1)

    rejected = [r for r in results if r.rejected]
    if rejected:
        out.rejections_table(results)
        die(f"{len(rejected)} of {len(results)} message(s) rejected", code=1)

    out.success(f"Emitted {len(results)} launch request(s)")


@app.command("config")
def show_config(ctx: typer.Context):
    """
    Show the resolved configuration (secrets are masked).
    """
    appctx: TransformAppContext = ctx.obj
    config = appctx.config

    out.header("Resolved configuration")
    out.kv(
        {
            f"{name} ({env_var_name(name)})": _display_value(name, value)
            for name, value in asdict(config).items()
        }
    )

    if not config.uri:
        out.warn("No uri configured: every message will be rejected")


def _display_value(name: str, value: str | None) -> str:
    """Render a configuration value, masking the datasource password."""
    if value is None:
        return "-"
    if name == "data_source_password":
        return _MASK
    return value
