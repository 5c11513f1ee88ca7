# pyumlviz/dot_generator.py

import contextlib
import logging
import os
import subprocess
import sys
from typing import Optional

import graphviz

from .exceptions import DiagramRenderError
from .graph import DiagramGraph, Subgraph

logger = logging.getLogger('pyumlviz')

DOT_EXECUTABLE = "dot"


def find_graphviz_path(path_variable: Optional[str] = None, platform: Optional[str] = None) -> Optional[str]:
    """
    Locates the directory holding the Graphviz ``dot`` executable.

    On Windows only a presence check against PATH is made. Elsewhere each PATH
    entry is scanned and the first one containing ``dot`` is returned. A warning
    is logged when nothing is found; rendering is still attempted.
    """
    path_variable = os.environ.get("PATH", "") if path_variable is None else path_variable
    platform = sys.platform if platform is None else platform

    if platform == "win32":
        if "Graphviz" not in path_variable:
            logger.warning("Could not find Graphviz in PATH.")
        return None

    for location in path_variable.split(os.pathsep):
        if location and os.path.isfile(os.path.join(location, DOT_EXECUTABLE)):
            logger.debug(f"Using Graphviz from {location}")
            return location

    logger.warning("Could not find Graphviz in PATH.")
    return None


@contextlib.contextmanager
def graphviz_on_path(location: Optional[str]):
    """Puts ``location`` first on PATH while the ``dot`` subprocess runs."""
    if not location:
        yield
        return
    original = os.environ.get("PATH", "")
    os.environ["PATH"] = location + os.pathsep + original
    try:
        yield
    finally:
        os.environ["PATH"] = original


class DotGenerator:
    """Turns a diagram graph into Graphviz DOT and renders it to an image."""

    def __init__(self, graph: DiagramGraph):
        self.graph = graph
        self.graphviz_path: Optional[str] = None

    def generate(self) -> graphviz.Digraph:
        """Builds the ``graphviz.Digraph`` mirroring the diagram graph."""
        dot = graphviz.Digraph(
            self.graph.name,
            graph_attr=self.graph.attributes,
            node_attr=self.graph.node_attributes,
            edge_attr=self.graph.edge_attributes,
        )
        self._fill(dot, self.graph)
        return dot

    def _fill(self, dot: graphviz.Digraph, scope: Subgraph):
        for node in scope.nodes:
            dot.node(node.id, **node.attributes)
        for cluster in scope.clusters:
            sub = graphviz.Digraph(name=cluster.name, graph_attr=cluster.attributes)
            self._fill(sub, cluster)
            dot.subgraph(sub)
        for edge in scope.edges:
            dot.edge(edge.tail, edge.head, **edge.attributes)

    def render(self, output_filename: str, svg_output: bool = False) -> str:
        """Writes the diagram as SVG or PNG to ``output_filename``."""
        output_format = "svg" if svg_output else "png"
        self.graphviz_path = find_graphviz_path()
        dot = self.generate()
        try:
            logger.info(f"Rendering {output_format.upper()} to {output_filename}")
            with graphviz_on_path(self.graphviz_path):
                result = dot.render(outfile=output_filename, format=output_format, cleanup=True)
        except (graphviz.ExecutableNotFound, subprocess.CalledProcessError) as e:
            logger.error(f"Failed to render diagram: {e}")
            raise DiagramRenderError(f"Failed to render diagram to {output_filename}") from e
        logger.info(f"Diagram saved to {result}")
        return result
