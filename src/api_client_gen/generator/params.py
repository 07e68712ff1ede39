"""Parameter spelling for emitted functions.

Text and collection parameters are widened at function boundaries with
generic bounds (``T1: Into<Cow<'a, str>>``) and normalised to owned values
when stored.
"""

from typing import assert_never

from api_client_gen.model.types import CollectionOf, Scalar, Text, TypeRef, Void, render_type

LIFETIME = "'a"


def field_type(ref: TypeRef) -> str:
    """Type of a builder field holding the owned value."""
    match ref:
        case Scalar(name=name):
            return name
        case Text():
            return f"Cow<{LIFETIME}, str>"
        case CollectionOf():
            return render_type(ref)
        case Void():
            raise ValueError("void is not a parameter type")
        case _:
            assert_never(ref)


def owned_expr(expr: str, ref: TypeRef) -> str:
    """Expression converting a widened argument to the field type."""
    match ref:
        case Scalar():
            return expr
        case Text():
            return f"{expr}.into()"
        case CollectionOf(item=Text()):
            return f"{expr}.into_iter().map(|x| x.as_ref().to_owned()).collect()"
        case CollectionOf():
            return f"{expr}.into_iter().collect()"
        case Void():
            raise ValueError("void is not a parameter type")
        case _:
            assert_never(ref)


def parameter_value(expr: str, borrowed: str, ref: TypeRef) -> str:
    """Expression producing a ``ParameterValue`` for the request.

    ``expr`` names the value, ``borrowed`` a reference to it.
    """
    match ref:
        case Scalar() | Text():
            return f"{expr}.to_parameter_value()"
        case CollectionOf(item=Text()):
            return f"ParameterValue::Text(Cow::Owned(str_collection_parameter({borrowed})))"
        case CollectionOf():
            return f"ParameterValue::Text(Cow::Owned(collection_parameter({borrowed})))"
        case Void():
            raise ValueError("void is not a parameter type")
        case _:
            assert_never(ref)


class FnParameters:
    """Accumulates a function's generic type parameters and value parameters."""

    def __init__(self):
        self.type_parameters: list[str] = []
        self.parameters: list[str] = []

    def _add_type_parameter(self, bound: str) -> str:
        name = f"T{len(self.type_parameters) + 1}"
        self.type_parameters.append(f"{name}: {bound}")
        return name

    def add_parameter(self, name: str, ref: TypeRef) -> None:
        self.parameters.append(f"{name}: {self._widen(ref)}")

    def _widen(self, ref: TypeRef) -> str:
        match ref:
            case Scalar(name=name):
                return name
            case Text():
                return self._add_type_parameter(f"Into<Cow<{LIFETIME}, str>>")
            case CollectionOf(item=Text()):
                as_ref = self._add_type_parameter("AsRef<str>")
                return self._add_type_parameter(f"IntoIterator<Item = {as_ref}>")
            case CollectionOf(item=item):
                return self._add_type_parameter(f"IntoIterator<Item = {render_type(item)}>")
            case Void():
                raise ValueError("void is not a parameter type")
            case _:
                assert_never(ref)

    def generics(self) -> str:
        if not self.type_parameters:
            return ""
        return "<" + ", ".join(self.type_parameters) + ">"

    def arguments(self) -> str:
        return "".join(f", {p}" for p in self.parameters)
