import json
import logging
import sys

import click

from pyumlviz.analyzer import Analyzer
from pyumlviz.exceptions import PyUmlVizError
from pyumlviz.utils import setup_logging


@click.command()
@click.argument(
    "target",
    type=click.Path(exists=True, file_okay=True, dir_okay=True),
)
@click.argument(
    "output",
    type=click.Path(file_okay=True, dir_okay=False),
    default="diagram.png",
)
@click.option(
    "--dependencies",
    "-d",
    is_flag=True,
    help="Produce the modules' dependencies diagram instead of the class diagram.",
)
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="Include files in subdirectories.",
)
@click.option(
    "--svg",
    "svg_output",
    is_flag=True,
    help="Write an SVG file instead of a PNG.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Print the modules' dependencies as JSON instead of drawing a diagram.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Logging verbosity.",
)
def main(target, output, dependencies, recursive, svg_output, json_output, log_level):
    """
    pyumlviz: draws UML class diagrams and module dependency diagrams of Python projects.

    TARGET is a Python file or a directory; OUTPUT is the image file to write.
    """
    # keep stdout clean for the JSON summary
    setup_logging(getattr(logging, log_level.upper()), sys.stderr if json_output else None)
    analyzer = Analyzer(target, recursive=recursive)

    try:
        if json_output:
            click.echo(json.dumps(analyzer.get_modules_dependencies(), indent=2))
            return
        analyzer.create_graph(output, dependencies_only=dependencies, svg_output=svg_output)
    except PyUmlVizError as e:
        raise click.ClickException(str(e)) from e

    click.echo("Done")


if __name__ == "__main__":
    main()
