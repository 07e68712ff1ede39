"""Input models for endpoint catalogs.

Catalog loaders convert their input into these models; the endpoint model
builder consumes them.
"""

import re
from enum import Enum

from pydantic import BaseModel


class ParamKind(str, Enum):
    REQUIRED = "required"
    EITHER = "either"  # member of an "any one of" group
    OPTIONAL = "optional"


class ResponseShape(str, Enum):
    VOID = "void"
    SCALAR = "scalar"
    LISTED = "listed"
    CURSORED = "cursored"
    DICTIONARY = "dictionary"


class SourceParameter(BaseModel):
    """A single parameter as declared in the catalog."""

    name: str
    type: str
    kind: ParamKind = ParamKind.OPTIONAL
    group: int = 0  # any-one-of group id, only meaningful for EITHER


class AnyOneOfGroup(BaseModel):
    """Alternative parameter-name sets; the caller supplies one of them."""

    id: int
    alternatives: list[list[str]]


class SourceEndpoint(BaseModel):
    """A single endpoint descriptor."""

    name: str
    method: str  # Get / Post / Impl
    url: str = ""
    return_type: str
    shape: ResponseShape = ResponseShape.SCALAR
    reserved: str | None = None
    params: list[SourceParameter] = []
    any_one_of: list[AnyOneOfGroup] | None = None
    description: str | None = None
    json_path: str | None = None

    def alternative_groups(self) -> list[AnyOneOfGroup]:
        """Return the any-one-of groups, deriving them from EITHER parameters when not given.

        Each derived group holds one single-name alternative per parameter
        tagged with its id, in declaration order.
        """
        if self.any_one_of is not None:
            return list(self.any_one_of)

        groups: dict[int, list[list[str]]] = {}
        for p in self.params:
            if p.kind == ParamKind.EITHER:
                groups.setdefault(p.group, []).append([p.name])
        return [AnyOneOfGroup(id=gid, alternatives=alts) for gid, alts in groups.items()]


class SourceGroup(BaseModel):
    """A named collection of endpoints exposed under one client accessor."""

    name: str
    description: str | None = None
    endpoints: list[SourceEndpoint] = []


_GENERIC_RETURN_RE = re.compile(r"^(Listed|Cursored|Dictionary)<(.+)>$")


def split_return_declaration(text: str) -> tuple[str, ResponseShape]:
    """Split a combined return declaration like ``Listed<Status>`` into (name, shape)."""
    text = text.strip()
    if text == "void":
        return text, ResponseShape.VOID

    match = _GENERIC_RETURN_RE.match(text)
    if not match:
        return text, ResponseShape.SCALAR

    wrapper, inner = match.group(1), match.group(2).strip()
    if wrapper == "Listed":
        return inner, ResponseShape.LISTED
    if wrapper == "Cursored":
        return inner, ResponseShape.CURSORED
    return inner, ResponseShape.DICTIONARY
