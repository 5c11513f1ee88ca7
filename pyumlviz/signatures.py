# pyumlviz/signatures.py

"""Member signature lines and graph node identifiers."""

from typing import Callable, Iterable, List, TypeVar

from .elements import Element, ElementKind, Lifetime, Method, Property, QualifiedName, Visibility

STATIC_TOKEN = "\\<static\\>"
LINE_BREAK = "\\l"
PATH_SEPARATOR = "/"
NODE_ID_SEPARATOR = "|"

VISIBILITY_ORDER = (Visibility.PRIVATE, Visibility.PROTECTED, Visibility.PUBLIC)

_VISIBILITY_GLYPHS = {
    Visibility.PUBLIC: "+",
    Visibility.PROTECTED: "~",
    Visibility.PRIVATE: "-",
}

T = TypeVar('T', bound=Element)


def visibility_to_string(visibility: Visibility) -> str:
    return _VISIBILITY_GLYPHS[visibility]


def lifetime_to_string(lifetime: Lifetime) -> str:
    return STATIC_TOKEN if lifetime is Lifetime.STATIC else ""


def get_method_signature(method: Method) -> str:
    return " ".join([
        visibility_to_string(method.visibility),
        lifetime_to_string(method.lifetime),
        method.name + "()",
    ])


def get_property_signature(prop: Property) -> str:
    accessors = [marker for marker, present in (("get", prop.has_getter), ("set", prop.has_setter)) if present]
    return " ".join([
        visibility_to_string(prop.visibility),
        lifetime_to_string(prop.lifetime),
        "/".join(accessors),
        prop.name,
    ])


def format_signature(member: Element) -> str:
    """Formats a method or property as a single display line."""
    if member.kind is ElementKind.METHOD:
        return get_method_signature(member)
    if member.kind is ElementKind.PROPERTY:
        return get_property_signature(member)
    raise TypeError(f"Cannot format a signature for {member.kind.value}")


def sort_by_visibility(elements: Iterable[T]) -> List[T]:
    """Stable sort into private, protected, then public members."""
    elements = list(elements)
    return [e for visibility in VISIBILITY_ORDER for e in elements if e.visibility is visibility]


def combine_signatures(elements: Iterable[T], formatter: Callable[[T], str] = format_signature) -> str:
    """Joins member signatures, each followed by a left-justified line break."""
    return "".join(formatter(e) + LINE_BREAK for e in sort_by_visibility(elements))


def get_graph_node_id(path: str, name: str) -> str:
    """
    Flattens a hierarchical position into a node identifier.

    ``get_graph_node_id("app/models", "User")`` gives ``"app|models|User"``.
    """
    joined = (path + PATH_SEPARATOR if path else "") + name
    return joined.replace(PATH_SEPARATOR, NODE_ID_SEPARATOR)


def qualified_name_to_node_id(qualified_name: QualifiedName) -> str:
    """Identifier of the node a cross-reference points at."""
    node_id = ""
    for part in qualified_name.parts:
        node_id = get_graph_node_id(node_id, part)
    return node_id
