"""Return-type resolution.

The alias table and denylist are plain data; extending them never touches
the resolution steps.
"""

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from api_client_gen.model.types import PRIMITIVE_TYPES, VOID, CollectionOf, Scalar, TypeRef, render_type
from api_client_gen.parser.base import ResponseShape

STRING_RESPONSE = "StringResponse"
RESPONSE_SUFFIX = "Response"

RETURN_ALIASES = MappingProxyType({
    "Status": "Tweet",
    "Embed": "OEmbed",
    "SearchResult": "SearchResponse",
    "Configurations": "Configuration",
    "TrendLocation": "TrendPlace",
})

# Names with no model in the runtime crate.
UNSUPPORTED_RETURNS = frozenset({
    "Setting",
    "GeoResult",
    "SearchQuery",
    "ProfileBannerSizes",
    "Category",
})

# Cursored<long> pages are CursorIds, not CursorI64s.
CURSOR_ID_TYPES = frozenset({"long", "i64"})
CURSOR_ID_TOKEN = "Id"


class ReturnTables(BaseModel):
    model_config = ConfigDict(frozen=True)

    aliases: dict[str, str] = dict(RETURN_ALIASES)
    unsupported: frozenset[str] = UNSUPPORTED_RETURNS

    def extended(self, aliases: dict[str, str], unsupported: list[str]) -> "ReturnTables":
        return ReturnTables(
            aliases={**self.aliases, **aliases},
            unsupported=self.unsupported | frozenset(unsupported),
        )


DEFAULT_TABLES = ReturnTables()


def resolve_return_name(endpoint_name: str, declared: str, tables: ReturnTables = DEFAULT_TABLES) -> str | None:
    """Rewrite a declared return name to a model name, or None when there is no model for it."""
    if declared == STRING_RESPONSE:
        return f"{endpoint_name}{RESPONSE_SUFFIX}"

    name = declared
    if name.endswith(RESPONSE_SUFFIX) and name != RESPONSE_SUFFIX:
        name = name[: -len(RESPONSE_SUFFIX)]

    if name in tables.unsupported:
        return None
    name = tables.aliases.get(name, name)
    if name in tables.unsupported:
        return None
    return name


def resolve_return_type(
    endpoint_name: str,
    declared: str,
    shape: ResponseShape,
    tables: ReturnTables = DEFAULT_TABLES,
) -> TypeRef | None:
    """Combine the resolved name with the response shape.

    Returns None for endpoints whose result cannot be represented; the
    emitter skips those.
    """
    if shape == ResponseShape.VOID:
        return VOID
    if shape == ResponseShape.DICTIONARY:
        return None

    name = resolve_return_name(endpoint_name, declared, tables)
    if name is None:
        return None

    if shape == ResponseShape.CURSORED:
        if name in CURSOR_ID_TYPES:
            name = CURSOR_ID_TOKEN
        return Scalar(name=f"Cursor{name}s")

    primitive = PRIMITIVE_TYPES.get(name)
    item = Scalar(name=render_type(primitive)) if primitive is not None else Scalar(name=name)
    if shape == ResponseShape.LISTED:
        return CollectionOf(item=item)
    return item
