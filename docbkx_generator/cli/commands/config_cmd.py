"""Config command for viewing the resolved generator configuration."""

import typer

from ...errors import ConfigurationError
from ..app import app, console, get_json_mode
from ..options import (
    BaseDirOption,
    ConfigFileOption,
    DistributionOption,
    TypeOption,
    XslVersionOption,
    load_config,
)
from ..utils import ExitCode, Output


@app.command("config")
def config_command(
    output_type: TypeOption = None,
    xsl_version: XslVersionOption = None,
    distribution: DistributionOption = None,
    config_file: ConfigFileOption = None,
    base_dir: BaseDirOption = None,
):
    """Show the configuration a run would use, after all defaults are applied.

    Examples:
        docbkx-generator config -V 1.75.2
        docbkx-generator config -c docbkx.yaml -t fo
    """
    out = Output(console=console, json_mode=get_json_mode())
    try:
        config = load_config(
            config_file,
            type=output_type,
            version=xsl_version,
            distribution=distribution,
            base_directory=base_dir,
        )
    except ConfigurationError as e:
        out.error(str(e), exit_code=ExitCode.CONFIGURATION_ERROR)
        raise typer.Exit(out.finish())

    values = config.to_dict()
    if out.json_mode:
        out.set_data("config", values)
    else:
        console.print()
        console.print("[bold]docbkx-generator configuration[/bold]")
        console.print("─" * 40)
        width = max(len(k) for k in values)
        for key, value in values.items():
            shown = value if value is not None else "[dim](none)[/dim]"
            console.print(f"  {key.ljust(width)} = {shown}")
        console.print()
    raise typer.Exit(out.finish())
