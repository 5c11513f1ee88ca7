# pyumlviz/graph.py

from typing import Dict, Iterator, List, Optional
import logging

from .elements import Class, Module, Visibility
from .signatures import (
    combine_signatures,
    get_graph_node_id,
    get_method_signature,
    get_property_signature,
    qualified_name_to_node_id,
    visibility_to_string,
)

logger = logging.getLogger('pyumlviz')

FONT_SIZE_KEY = "fontsize"
FONT_SIZE = 12
FONT_NAME_KEY = "fontname"
FONT_NAME = "Verdana"
MODULE_PREFIX = "cluster_"

INHERITANCE_ARROWHEAD = "onormal"
ASSOCIATION_ARROWHEAD = "vee"


class GraphNode:
    """A node of the diagram, identified by its encoded id."""

    def __init__(self, node_id: str, attributes: Optional[Dict[str, str]] = None):
        self.id = node_id
        self.attributes = dict(attributes or {})

    @property
    def label(self) -> Optional[str]:
        return self.attributes.get("label")

    def __repr__(self):
        return f"GraphNode(id={self.id!r})"


class GraphEdge:
    """A directed edge; endpoints are node ids which may not exist in the graph."""

    def __init__(self, tail: str, head: str, attributes: Optional[Dict[str, str]] = None):
        self.tail = tail
        self.head = head
        self.attributes = dict(attributes or {})

    def __repr__(self):
        return f"GraphEdge({self.tail!r} -> {self.head!r})"


class Subgraph:
    """A graph scope holding nodes, edges and nested clusters in insertion order."""

    def __init__(self, name: str, attributes: Optional[Dict[str, str]] = None):
        self.name = name
        self.attributes: Dict[str, str] = dict(attributes or {})
        self.nodes: List[GraphNode] = []
        self.edges: List[GraphEdge] = []
        self.clusters: List['Subgraph'] = []

    def set(self, key: str, value):
        self.attributes[key] = str(value)

    def add_cluster(self, name: str) -> 'Subgraph':
        cluster = Subgraph(name)
        self.clusters.append(cluster)
        logger.debug(f"Added cluster {name}")
        return cluster

    def add_node(self, node_id: str, attributes: Optional[Dict[str, str]] = None) -> GraphNode:
        node = GraphNode(node_id, attributes)
        self.nodes.append(node)
        logger.debug(f"Added node {node_id}")
        return node

    def add_edge(self, tail: str, head: str, attributes: Optional[Dict[str, str]] = None) -> GraphEdge:
        edge = GraphEdge(tail, head, attributes)
        self.edges.append(edge)
        logger.debug(f"Added edge from {tail} to {head}")
        return edge

    def iter_nodes(self) -> Iterator[GraphNode]:
        """Nodes of this scope and all nested clusters, depth first."""
        yield from self.nodes
        for cluster in self.clusters:
            yield from cluster.iter_nodes()

    def iter_edges(self) -> Iterator[GraphEdge]:
        yield from self.edges
        for cluster in self.clusters:
            yield from cluster.iter_edges()

    def iter_clusters(self) -> Iterator['Subgraph']:
        for cluster in self.clusters:
            yield cluster
            yield from cluster.iter_clusters()


class DiagramGraph(Subgraph):
    """Root directed graph with default node and edge attributes."""

    def __init__(self, name: str = "G"):
        super().__init__(name)
        self.node_attributes: Dict[str, str] = {}
        self.edge_attributes: Dict[str, str] = {}

    def set_node_attribute(self, key: str, value):
        self.node_attributes[key] = str(value)

    def set_edge_attribute(self, key: str, value):
        self.edge_attributes[key] = str(value)


def cluster_color(level: int) -> str:
    """Fill shade for a module cluster at nesting ``level``, floored at gray40."""
    return f"gray{max(40, 95 - level * 6)}"


class UmlBuilder:
    """Walks a forest of modules and assembles the diagram graph."""

    def build_graph(self, modules: List[Module], dependencies_only: bool = False) -> DiagramGraph:
        logger.info("Building diagram graph")
        g = DiagramGraph("G")

        g.set(FONT_SIZE_KEY, FONT_SIZE)
        g.set(FONT_NAME_KEY, FONT_NAME)
        g.set_edge_attribute(FONT_SIZE_KEY, FONT_SIZE)
        g.set_edge_attribute(FONT_NAME_KEY, FONT_NAME)
        g.set_node_attribute(FONT_SIZE_KEY, FONT_SIZE)
        g.set_node_attribute(FONT_NAME_KEY, FONT_NAME)
        g.set_node_attribute("shape", "record")

        for module in modules:
            self._build_module(module, g, module.path, 0, dependencies_only)

        logger.info(f"Built graph with {sum(1 for _ in g.iter_nodes())} nodes "
                    f"and {sum(1 for _ in g.iter_edges())} edges")
        return g

    def _build_module(self, module: Module, g: Subgraph, path: str, level: int, dependencies_only: bool):
        module_id = get_graph_node_id(path, module.name)
        cluster = g.add_cluster(MODULE_PREFIX + module_id)

        prefix = visibility_to_string(module.visibility) + " " if module.visibility is not Visibility.PUBLIC else ""
        cluster.set("label", prefix + module.name)
        cluster.set("style", "filled")
        cluster.set("color", cluster_color(level))

        if dependencies_only:
            seen = set()
            for dependency in module.dependencies:
                if dependency.name in seen:
                    continue
                seen.add(dependency.name)
                g.add_edge(module.name, get_graph_node_id("", dependency.name))
            return

        module_methods = combine_signatures(module.methods, get_method_signature)
        if module_methods:
            cluster.add_node(module_id, {"label": module_methods, "shape": "none"})

        # nested modules are always rendered in full
        for child_module in module.modules:
            self._build_module(child_module, cluster, module_id, level + 1, False)

        for child_class in module.classes:
            self._build_class(child_class, cluster, module_id)

    def _build_class(self, class_def: Class, g: Subgraph, path: str):
        methods_signatures = combine_signatures(class_def.methods, get_method_signature)
        properties_signatures = combine_signatures(class_def.properties, get_property_signature)

        segments = [s for s in (class_def.name, properties_signatures, methods_signatures) if s]
        class_node = g.add_node(
            get_graph_node_id(path, class_def.name),
            {"label": "{" + "|".join(segments) + "}"})

        if class_def.extends is not None:
            g.add_edge(class_node.id, qualified_name_to_node_id(class_def.extends),
                       {"arrowhead": INHERITANCE_ARROWHEAD})

        for dependency in class_def.dependencies:
            g.add_edge(class_node.id, qualified_name_to_node_id(dependency),
                       {"arrowhead": ASSOCIATION_ARROWHEAD})
