"""Generate command: plugin source + staged resources for one output type."""

import time
from pathlib import Path

import typer

from ...errors import GeneratorError
from ...pipeline import run
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
from ..utils import Output, format_elapsed


@app.command("generate")
def generate_command(
    output_type: TypeOption = None,
    xsl_version: XslVersionOption = None,
    distribution: DistributionOption = None,
    config_file: ConfigFileOption = None,
    base_dir: BaseDirOption = None,
    exclude: ExcludeOption = None,
    class_name: str | None = typer.Option(
        None, "--class-name", help="Generated class name (default: Docbkx<Type>Mojo)"
    ),
    package_name: str | None = typer.Option(
        None, "--package", help="Generated package (default: the group id)"
    ),
    group_id: str | None = typer.Option(
        None, "--group-id", help="Group id (default: net.sf.docbook)"
    ),
    super_class_name: str | None = typer.Option(
        None, "--super-class", help="Fully qualified super class of the generated class"
    ),
    plugin_suffix: str | None = typer.Option(
        None, "--plugin-suffix", help="Suffix used in the generated goal name"
    ),
    source_root: str | None = typer.Option(
        None,
        "--source-root",
        help="Root directory inside the zip (default: docbook-xsl-<version>/)",
    ),
    stylesheet_path: str | None = typer.Option(
        None, "--stylesheet", help="Stylesheet inside the root (default: <type>/docbook.xsl)"
    ),
    stylesheet_target_root: str | None = typer.Option(
        None, "--stylesheet-target-root", help="Staged root (default: META-INF/docbkx)"
    ),
    stylesheet_target_location: str | None = typer.Option(
        None,
        "--stylesheet-target-location",
        help="Staged stylesheet location (default: <target root>/<stylesheet>)",
    ),
    target_directory: Path | None = typer.Option(
        None, "--sources-dir", "-o", help="Generated sources directory"
    ),
    target_resources_directory: Path | None = typer.Option(
        None, "--resources-dir", "-r", help="Generated resources directory"
    ),
    source_extension: str | None = typer.Option(
        None, "--extension", help="Source file extension (default: java)"
    ),
    template_name: str | None = typer.Option(
        None, "--template", help="Template name in the template bundle"
    ),
):
    """
    Generate the plugin source and stage the stylesheet resources.

    Examples:
        docbkx-generator generate -t html -V 1.75.2
        docbkx-generator generate -t fo -V 1.75.2 -d lib/docbook-xsl-1.75.2.zip -x "use.extensions"
        docbkx-generator generate -c docbkx.yaml
    """
    start_time = time.time()
    out = Output(console=console, json_mode=get_json_mode())

    try:
        config = load_config(
            config_file,
            type=output_type,
            version=xsl_version,
            distribution=distribution,
            base_directory=base_dir,
            excluded_properties=exclude,
            class_name=class_name,
            package_name=package_name,
            group_id=group_id,
            super_class_name=super_class_name,
            plugin_suffix=plugin_suffix,
            source_root_directory=source_root,
            stylesheet_path=stylesheet_path,
            stylesheet_target_root=stylesheet_target_root,
            stylesheet_target_location=stylesheet_target_location,
            target_directory=target_directory,
            target_resources_directory=target_resources_directory,
            source_extension=source_extension,
            template_name=template_name,
        )
        if out.json_mode:
            result = run(config)
        else:
            with console.status(
                f"[cyan]Generating {config.class_name} from {config.distribution.name}...[/cyan]"
            ):
                result = run(config)
    except GeneratorError as e:
        out.generator_error(e)
        raise typer.Exit(out.finish())

    spec = result.specification
    undocumented = [p.name for p in spec.parameters if not p.description]
    out.success(
        f"Generated {result.source_file} ({len(spec.parameters)} parameters)",
        source_file=str(result.source_file),
        class_name=f"{spec.package_name}.{spec.class_name}",
        parameter_count=len(spec.parameters),
        undocumented=undocumented,
    )
    if undocumented:
        out.warning(f"{len(undocumented)} parameters have no description")
    out.success(
        f"Staged {result.staging.copied} resources into {result.resource_root} "
        f"({result.staging.skipped} already present)",
        resource_root=str(result.resource_root),
        staged=result.staging.copied,
        skipped=result.staging.skipped,
    )
    out.text(f"[dim]Done in {format_elapsed(time.time() - start_time)}[/dim]")
    raise typer.Exit(out.finish())
