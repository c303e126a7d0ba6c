import json
import logging

import click
from jsonschema.exceptions import SchemaError

from .pipeline import CodeGeneratorConfig, OutputFormat, PipelineGenerator, SchemaConversionError


@click.command()
@click.option("--namespace", "-n", default=None, type=str, help="Namespace of the generated model, e.g. com.example@1.0.0")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--format",
    "-f",
    "output_format",
    default=OutputFormat.CTO.value,
    type=click.Choice([output_format.value for output_format in OutputFormat]),
)
@click.option(
    "--definitions-path",
    default=None,
    type=str,
    help="Slash-separated location of the definitions, e.g. components/schemas",
)
@click.option("--metamodel-namespace", default=None, type=str)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug messages")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def json_schema_to_concerto(namespace, config, output_format, definitions_path, metamodel_namespace, verbose, path, output):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(path, encoding="utf-8") as f:
        schema = json.load(f)

    if config is not None:
        with open(config, encoding="utf-8") as f:
            config = json.load(f)
            config = CodeGeneratorConfig.from_dict(config)
    else:
        config = CodeGeneratorConfig()

    # Command line options override the config file
    if namespace is not None:
        config.namespace = namespace
    if metamodel_namespace is not None:
        config.meta_model_namespace = metamodel_namespace
    if definitions_path is not None:
        config.path_to_definitions = [segment for segment in definitions_path.split("/") if segment]

    if not config.namespace:
        raise click.UsageError("A namespace is required, pass --namespace or set it in the config file.")

    codegen = PipelineGenerator(schema, config, output_format)

    try:
        out = codegen.generate()
    except SchemaError as e:
        raise click.ClickException(f"Invalid JSON Schema: {e.message}") from e
    except SchemaConversionError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w", encoding="utf-8") as f:
        f.write(out if out.endswith("\n") else out + "\n")
