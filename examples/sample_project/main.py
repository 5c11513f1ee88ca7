# examples/sample_project/main.py

import module_a
from module_b import ClassB


def main():
    a = module_a.ClassA.create()
    b = ClassB("b")

    a.method_a()
    b.method_b()
    b.method_b_with_a(a)


if __name__ == "__main__":
    main()
