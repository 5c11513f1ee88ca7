# pyumlviz/parser.py

import ast
import builtins
import logging
import os
from typing import Dict, List, Optional

from pyumlviz.elements import (
    Class,
    ImportedModule,
    Lifetime,
    Method,
    Module,
    Property,
    QualifiedName,
    Visibility,
)
from pyumlviz.exceptions import FileParsingError

logger = logging.getLogger('pyumlviz')

_BUILTIN_NAMES = frozenset(dir(builtins))

# Generic containers whose first argument is the interesting type
_TYPE_WRAPPERS = frozenset({
    'Optional', 'Union', 'List', 'Set', 'FrozenSet', 'Tuple', 'Sequence',
    'Iterable', 'Iterator', 'Collection', 'Type', 'ClassVar', 'Final',
    'Annotated', 'list', 'set', 'frozenset', 'tuple', 'type',
})
# Mappings whose value type (second argument) is the interesting type
_MAPPING_WRAPPERS = frozenset({
    'Dict', 'DefaultDict', 'OrderedDict', 'Mapping', 'MutableMapping', 'dict',
})
_IGNORED_BASES = frozenset({'object', 'Generic', 'Protocol'})
_STDLIB_TYPING_MODULES = ('typing', 'typing_extensions', 'collections.abc')
_TYPING_NAMES = frozenset({'Any', 'None', 'NoReturn', 'Self', 'TypeVar', 'Callable'})


def visibility_from_name(name: str) -> Visibility:
    """Python naming convention: ``__x`` is private, ``_x`` protected."""
    if name.startswith('__') and not name.endswith('__'):
        return Visibility.PRIVATE
    if name.startswith('_') and not name.endswith('__'):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def get_module_name(file_path: str, project_root: str) -> str:
    """Dotted module name of a file relative to the project root."""
    if os.path.isfile(project_root):
        return os.path.splitext(os.path.basename(project_root))[0]

    rel_path = os.path.relpath(file_path, project_root)
    parts = os.path.splitext(rel_path)[0].split(os.sep)
    if parts[-1] == '__init__':
        parts = parts[:-1]
    if not parts:
        return os.path.basename(os.path.abspath(project_root))
    return '.'.join(parts)


class CodeParser:
    """Parses Python files into module trees."""

    def __init__(self, project_root: str):
        self.project_root = project_root
        self.modules: List[Module] = []

    def parse_files(self, file_paths):
        """Parses multiple Python files and returns their modules."""
        modules = []
        for file_path in file_paths:
            logger.debug(f"Parsing file: {file_path}")
            try:
                with open(file_path, 'r', encoding='utf-8') as file:
                    source = file.read()
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read {file_path}: {e}")
                raise FileParsingError(f"Failed to read {file_path}") from e
            module_name = get_module_name(file_path, self.project_root)
            is_package = os.path.basename(file_path) == '__init__.py'
            modules.append(self.parse_source(source, module_name, is_package, file_path))
        self.modules.extend(modules)
        return modules

    def parse_source(self, source: str, module_name: str, is_package: bool = False,
                     filename: str = '<unknown>') -> Module:
        """Builds the Module element for one source text."""
        try:
            tree = ast.parse(source, filename=filename)
        except SyntaxError as e:
            logger.error(f"Failed to parse {filename}: {e}")
            raise FileParsingError(f"Failed to parse {filename}") from e
        visitor = _ModuleVisitor(module_name, is_package)
        visitor.visit(tree)
        return visitor.module


class _ModuleVisitor(ast.NodeVisitor):
    """AST visitor that records the classes, functions and imports of one module."""

    def __init__(self, module_name: str, is_package: bool = False):
        self.module_name = module_name
        self.is_package = is_package
        self.module = Module(module_name, visibility=visibility_from_name(module_name.rpartition('.')[2]))
        self.import_map: Dict[str, str] = {}  # bound name -> dotted target
        self.local_classes = set()

    def visit_Module(self, node):
        # class names are known up front so forward references resolve locally
        self.local_classes = {n.name for n in node.body if isinstance(n, ast.ClassDef)}
        self.generic_visit(node)

    def visit_Import(self, node):
        for alias in node.names:
            if alias.asname:
                self.import_map[alias.asname] = alias.name
            else:
                head = alias.name.split('.')[0]
                self.import_map[head] = head
            self.module.add_element(ImportedModule(alias.name, self.module))

    def visit_ImportFrom(self, node):
        module_name = self._resolve_relative_import(node.module, node.level)
        if node.module is None:
            # "from . import x" binds sibling modules of the package
            for alias in node.names:
                if alias.name == '*':
                    if module_name:
                        self.module.add_element(ImportedModule(module_name, self.module))
                    continue
                target = f"{module_name}.{alias.name}" if module_name else alias.name
                self.import_map[alias.asname or alias.name] = target
                self.module.add_element(ImportedModule(target, self.module))
            return
        if not module_name:
            return
        for alias in node.names:
            if alias.name != '*':
                self.import_map[alias.asname or alias.name] = f"{module_name}.{alias.name}"
        self.module.add_element(ImportedModule(module_name, self.module))

    def _resolve_relative_import(self, module_name: Optional[str], level: int) -> str:
        """Resolve a relative import to an absolute module path."""
        if level == 0:
            return module_name or ""

        parts = self.module_name.split('.')
        if not self.is_package:
            parts = parts[:-1]
        if level - 1 > len(parts):
            logger.warning(f"Invalid relative import in {self.module_name}: level {level} too high")
            package = []
        else:
            package = parts[:len(parts) - (level - 1)]

        if module_name:
            package = package + [module_name]
        return '.'.join(package)

    def visit_FunctionDef(self, node):
        self.module.add_element(self._build_method(node, self.module))

    def visit_AsyncFunctionDef(self, node):
        self.visit_FunctionDef(node)

    def visit_ClassDef(self, node):
        class_def = Class(node.name, self.module, visibility_from_name(node.name))
        class_def.extends = self._resolve_base(node.bases)
        logger.debug(f"Found class: {node.name} in {self.module_name}")

        for item in node.body:
            if isinstance(item, (ast.FunctionDef, ast.AsyncFunctionDef)):
                self._add_function_member(class_def, item)
            elif isinstance(item, ast.AnnAssign) and isinstance(item.target, ast.Name):
                lifetime = Lifetime.STATIC if self._is_class_var(item.annotation) else Lifetime.INSTANCE
                class_def.add_element(Property(
                    item.target.id, class_def, visibility_from_name(item.target.id), lifetime,
                    type=self._resolve_type(item.annotation)))
            elif isinstance(item, ast.Assign):
                for target in item.targets:
                    if isinstance(target, ast.Name):
                        class_def.add_element(Property(
                            target.id, class_def, visibility_from_name(target.id), Lifetime.STATIC))

        self.module.add_element(class_def)

    def _resolve_base(self, bases) -> Optional[QualifiedName]:
        for base in bases:
            target = base.value if isinstance(base, ast.Subscript) else base
            chain = self._attribute_chain(target)
            if not chain or chain[-1] in _IGNORED_BASES:
                continue
            resolved = self._resolve_type(target)
            if resolved is not None:
                return resolved
        return None

    def _add_function_member(self, class_def: Class, node):
        decorators = [self._decorator_name(d) for d in node.decorator_list]
        visibility = visibility_from_name(node.name)

        if 'property' in decorators or 'cached_property' in decorators:
            class_def.add_element(Property(
                node.name, class_def, visibility, has_getter=True,
                type=self._resolve_type(node.returns)))
            return
        if f"{node.name}.setter" in decorators:
            args = node.args.args
            annotation = args[1].annotation if len(args) > 1 else None
            class_def.add_element(Property(
                node.name, class_def, visibility, has_setter=True,
                type=self._resolve_type(annotation)))
            return
        if f"{node.name}.deleter" in decorators:
            return

        class_def.add_element(self._build_method(node, class_def))
        self._collect_instance_attributes(class_def, node)

    def _build_method(self, node, parent) -> Method:
        decorators = [self._decorator_name(d) for d in node.decorator_list]
        is_static = 'staticmethod' in decorators or 'classmethod' in decorators
        method = Method(node.name, parent, visibility_from_name(node.name),
                        Lifetime.STATIC if is_static else Lifetime.INSTANCE)
        method.return_type = self._resolve_type(node.returns)

        args = node.args.posonlyargs + node.args.args + node.args.kwonlyargs
        if isinstance(parent, Class) and 'staticmethod' not in decorators:
            args = args[1:]
        for arg in args:
            arg_type = self._resolve_type(arg.annotation)
            if arg_type is not None:
                method.argument_types.append(arg_type)
        return method

    def _collect_instance_attributes(self, class_def: Class, node):
        """Records ``self.x: T = ...`` anywhere and ``self.x = ...`` in ``__init__``."""
        for child in ast.walk(node):
            if isinstance(child, ast.AnnAssign):
                targets, annotation = [child.target], child.annotation
            elif isinstance(child, ast.Assign) and node.name == '__init__':
                targets, annotation = child.targets, None
            else:
                continue
            for target in targets:
                if (isinstance(target, ast.Attribute) and isinstance(target.value, ast.Name)
                        and target.value.id == 'self'):
                    class_def.add_element(Property(
                        target.attr, class_def, visibility_from_name(target.attr),
                        type=self._resolve_type(annotation)))

    def _decorator_name(self, node) -> str:
        if isinstance(node, ast.Call):
            node = node.func
        chain = self._attribute_chain(node)
        if len(chain) >= 2 and chain[-1] in ('setter', 'getter', 'deleter'):
            return '.'.join(chain[-2:])
        return chain[-1] if chain else ''

    def _attribute_chain(self, node) -> List[str]:
        """Extract a chain of attribute access like module.submodule.Class."""
        parts = []
        while isinstance(node, ast.Attribute):
            parts.insert(0, node.attr)
            node = node.value
        if isinstance(node, ast.Name):
            parts.insert(0, node.id)
            return parts
        return []

    def _is_class_var(self, annotation) -> bool:
        if isinstance(annotation, ast.Subscript):
            annotation = annotation.value
        chain = self._attribute_chain(annotation)
        return bool(chain) and chain[-1] == 'ClassVar'

    def _resolve_type(self, node) -> Optional[QualifiedName]:
        """Resolves an annotation to the project type it refers to, if any."""
        if node is None:
            return None
        if isinstance(node, ast.Constant):
            if not isinstance(node.value, str):
                return None
            try:
                return self._resolve_type(ast.parse(node.value, mode='eval').body)
            except SyntaxError:
                return None
        if isinstance(node, ast.Subscript):
            chain = self._attribute_chain(node.value)
            if chain and (chain[-1] in _TYPE_WRAPPERS or chain[-1] in _MAPPING_WRAPPERS):
                arguments = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
                index = 1 if chain[-1] in _MAPPING_WRAPPERS else 0
                return self._resolve_type(arguments[index] if len(arguments) > index else None)
            return self._resolve_type(node.value)
        if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
            return self._resolve_type(node.left) or self._resolve_type(node.right)

        chain = self._attribute_chain(node)
        if not chain:
            return None
        head = chain[0]
        if len(chain) == 1:
            if head in self.local_classes:
                return QualifiedName([self.module_name, head])
            if head in self.import_map:
                resolved = _split_dotted(self.import_map[head])
                if resolved.parts[0] in _STDLIB_TYPING_MODULES:
                    return None
                return resolved
            if head in _BUILTIN_NAMES or head in _TYPING_NAMES:
                return None
            return QualifiedName([head])

        if head in self.import_map:
            chain = self.import_map[head].split('.') + chain[1:]
        module_name = '.'.join(chain[:-1])
        if module_name in _STDLIB_TYPING_MODULES:
            return None
        return QualifiedName([module_name, chain[-1]])


def _split_dotted(dotted: str) -> QualifiedName:
    module_name, _, name = dotted.rpartition('.')
    return QualifiedName([module_name, name] if module_name else [name])
