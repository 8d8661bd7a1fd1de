"""Common CLI options for the CLI.

Every configuration option falls back to its TASKLAUNCH_* environment
variable when it is not given on the command line.
"""

import typer

from tasklaunch.cli.common.output import OutputFormat

UriOpt = typer.Option(
    None,
    "--uri",
    help="URI of the artifact to launch (env: TASKLAUNCH_URI)",
)

ApplicationNameOpt = typer.Option(
    None,
    "--application-name",
    help="Application name; generated per request when unset",
)

CommandLineArgumentsOpt = typer.Option(
    None,
    "--command-line-arguments",
    help="Space-separated command-line arguments for the task",
)

DeploymentPropertiesOpt = typer.Option(
    None,
    "--deployment-properties",
    help='Deployment properties as key=value pairs, e.g. a=b,c="d,e"',
)

EnvironmentPropertiesOpt = typer.Option(
    None,
    "--environment-properties",
    help='Environment properties as key=value pairs, e.g. a=b,c="d,e"',
)

DataSourceUrlOpt = typer.Option(
    None,
    "--datasource-url",
    help="Sets spring.datasource.url in the environment properties",
)

DataSourceUserNameOpt = typer.Option(
    None,
    "--datasource-username",
    help="Sets spring.datasource.username in the environment properties",
)

DataSourcePasswordOpt = typer.Option(
    None,
    "--datasource-password",
    help="Sets spring.datasource.password in the environment properties",
)

DataSourceDriverClassNameOpt = typer.Option(
    None,
    "--datasource-driver-class-name",
    help="Sets spring.datasource.driver-class-name in the environment properties",
)

VerboseOpt = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Increase log verbosity (-v info, -vv debug)",
)

FormatOpt = typer.Option(
    OutputFormat.JSON,
    "--format",
    "-f",
    help="Output format: json or table",
)

ConfirmOpt = typer.Option(
    False,
    "--confirm/--no-confirm",
    help="Ask for confirmation before emitting the launch request",
)

EnvelopeOpt = typer.Option(
    False,
    "--envelope",
    help='Read and write JSON envelopes {"payload": ..., "headers": {...}} per line',
)

ParallelOpt = typer.Option(
    1,
    "--parallel",
    "-n",
    help="Number of messages to transform in parallel",
)

FailFastOpt = typer.Option(
    False,
    "--fail-fast",
    help="Stop at the first rejected message",
)
