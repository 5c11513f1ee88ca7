# tests/test_elements.py

import gc
import unittest

from pyumlviz.elements import (
    Class,
    ElementKind,
    ImportedModule,
    Lifetime,
    Method,
    Module,
    Property,
    QualifiedName,
    Visibility,
)
from pyumlviz.exceptions import PyUmlVizError, UnsupportedElementKind


class TestQualifiedName(unittest.TestCase):

    def test_name_and_full_name(self):
        qualified_name = QualifiedName(["Foo", "Bar"])
        self.assertEqual(qualified_name.name, "Bar")
        self.assertEqual(qualified_name.full_name, "Foo.Bar")
        self.assertEqual(qualified_name.parts, ["Foo", "Bar"])

    def test_single_segment(self):
        qualified_name = QualifiedName(["Foo"])
        self.assertEqual(qualified_name.name, "Foo")
        self.assertEqual(qualified_name.full_name, "Foo")

    def test_empty_is_rejected(self):
        with self.assertRaises(ValueError):
            QualifiedName([])

    def test_parts_are_copied(self):
        parts = ["a", "b"]
        qualified_name = QualifiedName(parts)
        parts.append("c")
        qualified_name.parts.append("d")
        self.assertEqual(qualified_name.full_name, "a.b")

    def test_equality(self):
        self.assertEqual(QualifiedName(["a", "b"]), QualifiedName(("a", "b")))
        self.assertNotEqual(QualifiedName(["a", "b"]), QualifiedName(["a.b"]))


class TestElementDefaults(unittest.TestCase):

    def test_defaults(self):
        method = Method("run")
        self.assertEqual(method.visibility, Visibility.PUBLIC)
        self.assertEqual(method.lifetime, Lifetime.INSTANCE)
        self.assertIsNone(method.parent)
        self.assertIsNone(method.return_type)
        self.assertEqual(method.argument_types, [])

    def test_parent_is_a_back_reference(self):
        module = Module("app")
        class_def = Class("Base", module)
        module.add_element(class_def)
        self.assertIs(class_def.parent, module)

    def test_parent_does_not_keep_owner_alive(self):
        module = Module("app")
        method = Method("run", module)
        del module
        gc.collect()
        self.assertIsNone(method.parent)

    def test_module_path_is_mutable(self):
        module = Module("app")
        self.assertEqual(module.path, "")
        module.path = "src/app"
        self.assertEqual(module.path, "src/app")


class TestModuleCollections(unittest.TestCase):

    def test_children_land_in_matching_collections(self):
        module = Module("app")
        nested = Module("nested", module)
        class_def = Class("Base", module)
        method = Method("main", module)
        dependency = ImportedModule("os", module)

        for element in (nested, class_def, method, dependency):
            module.add_element(element)

        self.assertEqual(module.modules, [nested])
        self.assertEqual(module.classes, [class_def])
        self.assertEqual(module.methods, [method])
        self.assertEqual(module.dependencies, [dependency])

    def test_insertion_order_is_kept(self):
        module = Module("app")
        for name in ("b", "a", "c"):
            module.add_element(Method(name, module))
        self.assertEqual([m.name for m in module.methods], ["b", "a", "c"])

    def test_property_is_unsupported(self):
        module = Module("app")
        with self.assertRaises(UnsupportedElementKind) as context:
            module.add_element(Property("x", module))
        self.assertEqual(context.exception.child_kind, ElementKind.PROPERTY)
        self.assertEqual(context.exception.parent_kind, ElementKind.MODULE)
        self.assertIn("Property", str(context.exception))
        self.assertIn("Module", str(context.exception))


class TestClassCollections(unittest.TestCase):

    def test_method_is_attached(self):
        class_def = Class("Base")
        method = Method("run", class_def)
        class_def.add_element(method)
        self.assertEqual(class_def.methods, [method])

    def test_unsupported_children(self):
        class_def = Class("Base")
        for element in (Module("m"), Class("Inner"), ImportedModule("os")):
            with self.assertRaises(UnsupportedElementKind) as context:
                class_def.add_element(element)
            self.assertEqual(context.exception.parent_kind, ElementKind.CLASS)
            self.assertEqual(context.exception.child_kind, element.kind)

    def test_leaf_elements_accept_nothing(self):
        for parent in (Method("run"), Property("x"), ImportedModule("os")):
            with self.assertRaises(PyUmlVizError):
                parent.add_element(Method("other"))

    def test_property_merge_ors_accessor_flags(self):
        for first, second in ((True, False), (False, True)):
            class_def = Class("Point")
            class_def.add_element(Property("x", class_def, has_getter=first, has_setter=first))
            class_def.add_element(Property("x", class_def, has_getter=second, has_setter=second))

            self.assertEqual(len(class_def.properties), 1)
            merged = class_def.properties[0]
            self.assertTrue(merged.has_getter)
            self.assertTrue(merged.has_setter)

    def test_property_merge_keeps_both_false(self):
        class_def = Class("Point")
        class_def.add_element(Property("x", class_def))
        class_def.add_element(Property("x", class_def))
        merged = class_def.properties[0]
        self.assertFalse(merged.has_getter)
        self.assertFalse(merged.has_setter)

    def test_property_merge_is_pure(self):
        getter = Property("x", has_getter=True, type=QualifiedName(["int"]))
        setter = Property("x", has_setter=True)
        merged = getter.merge(setter)

        self.assertTrue(merged.has_getter and merged.has_setter)
        self.assertEqual(merged.type, QualifiedName(["int"]))
        self.assertFalse(getter.has_setter)
        self.assertFalse(setter.has_getter)
        self.assertEqual(setter.merge(getter).type, QualifiedName(["int"]))

    def test_properties_keep_first_insertion_order(self):
        class_def = Class("Point")
        for name in ("y", "x", "y"):
            class_def.add_element(Property(name, class_def))
        self.assertEqual([p.name for p in class_def.properties], ["y", "x"])

    def test_dependencies_are_deduplicated_by_full_name(self):
        class_def = Class("Shape")
        class_def.add_element(Property("x", class_def, has_getter=True, type=QualifiedName(["lib", "TypeA"])))
        class_def.add_element(Property("y", class_def, has_setter=True, type=QualifiedName(["lib", "TypeA"])))
        class_def.add_element(Property("z", class_def, type=QualifiedName(["TypeB"])))
        class_def.add_element(Property("w", class_def))

        self.assertEqual(
            [d.full_name for d in class_def.dependencies],
            ["lib.TypeA", "TypeB"])

    def test_extends_defaults_to_none(self):
        self.assertIsNone(Class("Base").extends)


if __name__ == '__main__':
    unittest.main()
