# examples/sample_project/module_a.py


class ClassA:
    counter: int = 0

    def __init__(self, name: str):
        self._name = name
        self.__secret = None

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str):
        self._name = value

    @staticmethod
    def create() -> "ClassA":
        return ClassA("default")

    def method_a(self):
        print("ClassA: method_a called")

    def _reset(self):
        self.__secret = None
