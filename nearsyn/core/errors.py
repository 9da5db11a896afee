"""
Fatal errors raised while building or projecting a contract.

Every error aborts the whole run: there is no unit-level isolation.
"""


class NearSynError(Exception):
    """Base class for all nearsyn errors"""


class MalformedSelfType(NearSynError, ValueError):
    """An implementation's owning type is not a simple name"""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Implementation owning type is not a simple name: {text}")


class UnsupportedTypeShape(NearSynError, NotImplementedError):
    """The type projector met a composite type it does not recognize"""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unsupported type: {text}")


class GenericArityMismatch(NearSynError, ValueError):
    """A wrapper type was used with the wrong number of type arguments"""

    def __init__(self, wrapper: str, expected: int, actual: int):
        self.wrapper = wrapper
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{wrapper} expects {expected} generic(s) argument(s), found {actual}"
        )


class UnitStructUnsupported(NearSynError, NotImplementedError):
    """A serializable struct with no fields has no TypeScript equivalent"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unit struct not supported: {name}")


class DuplicateMethod(NearSynError, ValueError):
    """A method name was exported twice under the reject policy"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Method already exported: {name}")


class InvalidUnit(NearSynError, ValueError):
    """A raw declaration unit could not be read"""
