# pyumlviz/exceptions.py

class PyUmlVizError(Exception):
    """Base exception class for pyumlviz errors."""
    pass


class UnsupportedElementKind(PyUmlVizError):
    """Exception raised when an element cannot be attached to a parent of the given kind."""

    def __init__(self, child_kind, parent_kind):
        self.child_kind = child_kind
        self.parent_kind = parent_kind
        super().__init__(f"{child_kind.value} not supported in {parent_kind.value}")


class FileParsingError(PyUmlVizError):
    """Exception raised when a file cannot be parsed."""
    pass


class DiagramRenderError(PyUmlVizError):
    """Exception raised when the diagram cannot be rendered to an image."""
    pass
