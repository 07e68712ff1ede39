"""Type algebra: the closed set of parameter and return types.

``TypeRef`` has exactly four variants. Code that consumes one matches over
all of them and ends with ``assert_never`` so a new variant is caught by the
type checker at every call site.
"""

import re
from types import MappingProxyType
from typing import Literal, assert_never

from pydantic import BaseModel, ConfigDict


class Scalar(BaseModel):
    """An opaque target type carried by value (``i32``, ``u64``, ``Tweet``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    name: str


class Text(BaseModel):
    """A string; borrowed at API boundaries, owned once stored."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"


class CollectionOf(BaseModel):
    """An owned, ordered sequence of ``item``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["collection"] = "collection"
    item: "TypeRef"


class Void(BaseModel):
    """No payload. Only valid as a return type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["void"] = "void"


TypeRef = Scalar | Text | CollectionOf | Void

CollectionOf.model_rebuild()

TEXT = Text()
VOID = Void()

# Source primitive name -> target type.
PRIMITIVE_TYPES = MappingProxyType({
    "string": TEXT,
    "int": Scalar(name="i32"),
    "uint": Scalar(name="u32"),
    "long": Scalar(name="i64"),
    "ulong": Scalar(name="u64"),
    "double": Scalar(name="f64"),
    "float": Scalar(name="f32"),
    "bool": Scalar(name="bool"),
})

_GENERIC_RE = re.compile(r"^[A-Za-z_][\w.]*\s*<(.+)>$")
_ARRAY_RE = re.compile(r"^(.+)\[\]$")


def resolve_type(name: str) -> TypeRef:
    """Map a source type name onto a ``TypeRef``.

    Single-argument generics (``IEnumerable<long>``, ``List<string>``) and
    arrays (``long[]``) become collections of their resolved element type.
    Unknown names pass through as ``Scalar(name)``. Never returns ``Void``.
    """
    name = name.strip()

    match = _GENERIC_RE.match(name) or _ARRAY_RE.match(name)
    if match and "," not in _top_level(match.group(1)):
        return CollectionOf(item=resolve_type(match.group(1)))

    primitive = PRIMITIVE_TYPES.get(name)
    if primitive is not None:
        return primitive
    return Scalar(name=name)


def _top_level(text: str) -> str:
    """Drop everything nested inside angle brackets so only top-level commas remain."""
    depth = 0
    out = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif depth == 0:
            out.append(ch)
    return "".join(out)


def render_type(ref: TypeRef) -> str:
    """Owned target spelling of a type, as stored in struct fields."""
    match ref:
        case Scalar(name=name):
            return name
        case Text():
            return "String"
        case CollectionOf(item=item):
            return f"Vec<{render_type(item)}>"
        case Void():
            return "()"
        case _:
            assert_never(ref)


def describe_type(ref: TypeRef) -> str:
    match ref:
        case Scalar(name=name):
            return name
        case Text():
            return "text"
        case CollectionOf(item=item):
            return f"a collection of {describe_type(item)}"
        case Void():
            return "nothing"
        case _:
            assert_never(ref)
