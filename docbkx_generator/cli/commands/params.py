"""Params command: list the parameters a generated plugin would expose."""

import typer

from ...builder import extract_specification
from ...errors import GeneratorError
from ...extractor import XsltParameterTransformer
from ...pipeline import check_distribution
from ..app import app, console, get_json_mode
from ..options import (
    BaseDirOption,
    ConfigFileOption,
    DistributionOption,
    ExcludeOption,
    TypeOption,
    XslVersionOption,
    load_config,
)
from ..utils import Output


@app.command("params")
def params_command(
    output_type: TypeOption = None,
    xsl_version: XslVersionOption = None,
    distribution: DistributionOption = None,
    config_file: ConfigFileOption = None,
    base_dir: BaseDirOption = None,
    exclude: ExcludeOption = None,
    undocumented: bool = typer.Option(
        False, "--undocumented", help="Only list parameters without a description"
    ),
):
    """
    Show the parameters of an output type without writing anything.

    Examples:
        docbkx-generator params -t html -V 1.75.2
        docbkx-generator --json params -t fo -V 1.75.2 --undocumented
    """
    out = Output(console=console, json_mode=get_json_mode())

    try:
        config = load_config(
            config_file,
            type=output_type,
            version=xsl_version,
            distribution=distribution,
            base_directory=base_dir,
            excluded_properties=exclude,
        )
        check_distribution(config)
        spec = extract_specification(config, XsltParameterTransformer())
    except GeneratorError as e:
        out.generator_error(e)
        raise typer.Exit(out.finish())

    parameters = [p for p in spec.parameters if not (undocumented and p.description)]
    out.table(
        f"{config.output_type} parameters",
        ["Name", "Description"],
        [[p.name, p.description] for p in parameters],
        data_key="parameters",
        styles=["cyan", None],
    )
    out.success(
        f"{len(parameters)} of {len(spec.parameters)} parameters shown",
        output_type=config.output_type,
        parameter_count=len(spec.parameters),
    )
    raise typer.Exit(out.finish())
