# pyumlviz/analyzer.py

import logging
import os
from typing import Dict, List

import networkx as nx

from .utils import get_python_files
from .parser import CodeParser
from .graph import DiagramGraph, UmlBuilder
from .dot_generator import DotGenerator
from .elements import Module

logger = logging.getLogger('pyumlviz')


def get_modules_dependencies(modules: List[Module]) -> List[Dict]:
    """Module names with their distinct, alphabetically sorted dependency names."""
    output_modules = []
    for module in sorted(modules, key=lambda m: m.name):
        unique_dependencies = {dependency.name for dependency in module.dependencies}
        output_modules.append({
            'name': module.name,
            'dependencies': sorted(unique_dependencies),
        })
    return output_modules


def find_dependency_cycles(modules: List[Module]) -> List[List[str]]:
    """Cycles in the module import graph, limited to the analysed modules."""
    G = nx.DiGraph()
    names = {module.name for module in modules}
    G.add_nodes_from(sorted(names))
    for module in modules:
        for dependency in module.dependencies:
            if dependency.name in names:
                G.add_edge(module.name, dependency.name)
    return list(nx.simple_cycles(G))


class Analyzer:
    """Main class responsible for analyzing a Python project and drawing its diagram."""

    def __init__(self, target_path: str, recursive: bool = False):
        self.target_path = os.path.abspath(target_path)
        self.recursive = recursive
        self.parser = CodeParser(self.target_path)
        self.builder = UmlBuilder()

    def get_modules(self) -> List[Module]:
        """Analyses the target and returns one module per source file."""
        logger.info(f"Starting analysis of project at: {self.target_path}")
        python_files = get_python_files(self.target_path, self.recursive)
        logger.debug(f"Python files found: {python_files}")
        modules = self.parser.parse_files(python_files)
        logger.info(f"Found {len(modules)} module(s)")
        return modules

    def build_graph(self, dependencies_only: bool = False) -> DiagramGraph:
        modules = self.get_modules()
        if dependencies_only:
            for cycle in find_dependency_cycles(modules):
                logger.warning(f"Dependency cycle detected: {' -> '.join(cycle + cycle[:1])}")
        return self.builder.build_graph(modules, dependencies_only)

    def create_graph(self, output_filename: str, dependencies_only: bool = False, svg_output: bool = False) -> str:
        """Analyses the target and renders its diagram to ``output_filename``."""
        graph = self.build_graph(dependencies_only)
        return DotGenerator(graph).render(output_filename, svg_output)

    def get_modules_dependencies(self) -> List[Dict]:
        return get_modules_dependencies(self.get_modules())
