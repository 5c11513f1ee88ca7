# pyumlviz/__init__.py

"""
pyumlviz: UML class diagrams and module dependency diagrams for Python projects, drawn with Graphviz.
"""

__version__ = "0.1.0"

from .analyzer import Analyzer, get_modules_dependencies
from .elements import Class, ImportedModule, Lifetime, Method, Module, Property, QualifiedName, Visibility
from .graph import DiagramGraph, UmlBuilder
from .dot_generator import DotGenerator

__all__ = [
    "Analyzer", "get_modules_dependencies",
    "Class", "ImportedModule", "Lifetime", "Method", "Module", "Property", "QualifiedName", "Visibility",
    "DiagramGraph", "UmlBuilder", "DotGenerator",
]
