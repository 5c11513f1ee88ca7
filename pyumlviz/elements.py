# pyumlviz/elements.py

"""
In-memory model of analysed program structure.

A project is a forest of Module trees. Modules own nested modules, classes,
module-level methods and import edges; classes own methods and properties.
Inheritance targets and property types are kept as QualifiedName
cross-references and are only resolved to node identifiers when the diagram
is built.
"""

import weakref
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .exceptions import UnsupportedElementKind


class Visibility(Enum):
    PRIVATE = "private"
    PUBLIC = "public"
    PROTECTED = "protected"


class Lifetime(Enum):
    STATIC = "static"
    INSTANCE = "instance"


class ElementKind(Enum):
    MODULE = "Module"
    CLASS = "Class"
    METHOD = "Method"
    PROPERTY = "Property"
    IMPORTED_MODULE = "ImportedModule"


class QualifiedName:
    """Dotted path of name segments, e.g. ``QualifiedName(["app", "Base"])``."""

    def __init__(self, parts: Sequence[str]):
        if not parts:
            raise ValueError("QualifiedName requires at least one segment")
        self._parts = tuple(parts)

    @property
    def parts(self) -> List[str]:
        return list(self._parts)

    @property
    def name(self) -> str:
        return self._parts[-1]

    @property
    def full_name(self) -> str:
        return '.'.join(self._parts)

    def __eq__(self, other):
        if not isinstance(other, QualifiedName):
            return NotImplemented
        return self._parts == other._parts

    def __hash__(self):
        return hash(self._parts)

    def __repr__(self):
        return f"QualifiedName({list(self._parts)!r})"


class Element:
    """Common base for every analysed entity."""

    kind: ElementKind

    def __init__(self, name: str, parent: Optional['Element'] = None,
                 visibility: Visibility = Visibility.PUBLIC,
                 lifetime: Lifetime = Lifetime.INSTANCE):
        self._name = name
        # Back-reference only; children are owned by the parent's collections.
        self._parent = weakref.ref(parent) if parent is not None else None
        self._visibility = visibility
        self._lifetime = lifetime

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional['Element']:
        return self._parent() if self._parent is not None else None

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    @property
    def lifetime(self) -> Lifetime:
        return self._lifetime

    def add_element(self, element: 'Element'):
        """Attaches ``element`` to the collection matching its kind."""
        self._get_element_collection(element).append(element)

    def _get_element_collection(self, element: 'Element') -> list:
        raise UnsupportedElementKind(element.kind, self.kind)

    def __repr__(self):
        return f"{type(self).__name__}(name={self._name!r})"


class Module(Element):
    kind = ElementKind.MODULE

    def __init__(self, name: str, parent: Optional[Element] = None,
                 visibility: Visibility = Visibility.PUBLIC,
                 lifetime: Lifetime = Lifetime.INSTANCE):
        super().__init__(name, parent, visibility, lifetime)
        self.modules: List['Module'] = []
        self.classes: List['Class'] = []
        self.methods: List['Method'] = []
        self.dependencies: List['ImportedModule'] = []
        self.path = ""

    def _get_element_collection(self, element: Element) -> list:
        if element.kind is ElementKind.CLASS:
            return self.classes
        if element.kind is ElementKind.MODULE:
            return self.modules
        if element.kind is ElementKind.IMPORTED_MODULE:
            return self.dependencies
        if element.kind is ElementKind.METHOD:
            return self.methods
        return super()._get_element_collection(element)


class Class(Element):
    kind = ElementKind.CLASS

    def __init__(self, name: str, parent: Optional[Element] = None,
                 visibility: Visibility = Visibility.PUBLIC,
                 lifetime: Lifetime = Lifetime.INSTANCE):
        super().__init__(name, parent, visibility, lifetime)
        self.methods: List['Method'] = []
        self._properties: Dict[str, 'Property'] = {}
        self.extends: Optional[QualifiedName] = None

    @property
    def properties(self) -> List['Property']:
        return list(self._properties.values())

    @property
    def dependencies(self) -> List[QualifiedName]:
        """Distinct property types, keyed by full dotted name, first-seen order."""
        unique: Dict[str, QualifiedName] = {}
        for prop in self._properties.values():
            if prop.type is None:
                continue
            unique[prop.type.full_name] = prop.type
        return list(unique.values())

    def add_element(self, element: Element):
        if element.kind is ElementKind.PROPERTY:
            existing = self._properties.get(element.name)
            self._properties[element.name] = existing.merge(element) if existing else element
            return
        super().add_element(element)

    def _get_element_collection(self, element: Element) -> list:
        if element.kind is ElementKind.METHOD:
            return self.methods
        return super()._get_element_collection(element)


class Method(Element):
    kind = ElementKind.METHOD

    def __init__(self, name: str, parent: Optional[Element] = None,
                 visibility: Visibility = Visibility.PUBLIC,
                 lifetime: Lifetime = Lifetime.INSTANCE):
        super().__init__(name, parent, visibility, lifetime)
        self.return_type: Optional[QualifiedName] = None
        self.argument_types: List[QualifiedName] = []


class Property(Element):
    kind = ElementKind.PROPERTY

    def __init__(self, name: str, parent: Optional[Element] = None,
                 visibility: Visibility = Visibility.PUBLIC,
                 lifetime: Lifetime = Lifetime.INSTANCE,
                 has_getter: bool = False, has_setter: bool = False,
                 type: Optional[QualifiedName] = None):
        super().__init__(name, parent, visibility, lifetime)
        self.has_getter = has_getter
        self.has_setter = has_setter
        self.type = type

    def merge(self, other: 'Property') -> 'Property':
        """
        Returns a new property combining accessor flags of ``self`` and ``other``.

        Name, parent, visibility and lifetime come from ``self``; the type too,
        unless ``self`` has none.
        """
        return Property(
            self.name,
            self.parent,
            self.visibility,
            self.lifetime,
            has_getter=self.has_getter or other.has_getter,
            has_setter=self.has_setter or other.has_setter,
            type=self.type if self.type is not None else other.type,
        )


class ImportedModule(Element):
    """Target of an import edge; not a contained entity."""

    kind = ElementKind.IMPORTED_MODULE
