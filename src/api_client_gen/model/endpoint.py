"""Endpoint model builder.

Turns catalog descriptors into immutable ``Endpoint`` models: parameter
types resolved, parameters classified, return type resolved and the
reserved path parameter checked against the parameter list.
"""

import logging
import re
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from api_client_gen.config import GeneratorConfig
from api_client_gen.errors import CatalogError
from api_client_gen.model.classifier import ClassificationError, classify_parameters
from api_client_gen.model.returns import resolve_return_type
from api_client_gen.model.types import CollectionOf, TypeRef, resolve_type
from api_client_gen.parser.base import SourceEndpoint, SourceGroup, SourceParameter

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


class Parameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeRef


class Endpoint(BaseModel):
    """A single endpoint ready for emission. ``return_type`` None means unsupported."""

    model_config = ConfigDict(frozen=True)

    group: str
    name: str
    method: str
    return_type: TypeRef | None
    source_return_type: str
    url: str
    reserved: str | None = None
    required: tuple[Parameter, ...] = ()
    optional: tuple[Parameter, ...] = ()
    description: str | None = None

    @property
    def parameters(self) -> tuple[Parameter, ...]:
        return self.required + self.optional

    @property
    def param_capacity(self) -> int:
        """Number of key/value slots the execute method allocates."""
        return len(self.required) + len(self.optional) - (1 if self.reserved else 0)


class Group(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    endpoints: tuple[Endpoint, ...] = ()


def find_reserved_parameter(url: str) -> str | None:
    """Name of the first ``{name}`` placeholder in a URL template."""
    match = PLACEHOLDER_RE.search(url)
    return match.group(1) if match else None


def _to_parameters(params: Sequence[SourceParameter]) -> tuple[Parameter, ...]:
    return tuple(Parameter(name=p.name, type=resolve_type(p.type)) for p in params)


def build_endpoint(group_name: str, source: SourceEndpoint, config: GeneratorConfig | None = None) -> Endpoint:
    """Build the immutable model for one catalog endpoint.

    Raises CatalogError when the descriptor contradicts itself.
    """
    config = config or GeneratorConfig()

    try:
        classification = classify_parameters(source.params, source.alternative_groups())
    except ClassificationError as e:
        raise CatalogError(group_name, source.name, str(e)) from e

    required = list(_to_parameters(classification.required))
    optional = list(_to_parameters(classification.optional))

    reserved = source.reserved or find_reserved_parameter(source.url)
    if reserved is not None:
        matches = [p for p in required + optional if p.name == reserved]
        if len(matches) != 1:
            raise CatalogError(
                group_name, source.name,
                f"reserved parameter '{reserved}' does not name a declared parameter",
            )
        if not PLACEHOLDER_RE.search(source.url):
            raise CatalogError(
                group_name, source.name,
                f"reserved parameter '{reserved}' has no placeholder in '{source.url}'",
            )
        reserved_param = matches[0]
        if isinstance(reserved_param.type, CollectionOf):
            raise CatalogError(
                group_name, source.name,
                f"reserved parameter '{reserved}' is a collection and cannot be substituted into the URL",
            )
        if reserved_param in optional:
            # The URL cannot be built without it.
            optional.remove(reserved_param)
            required.append(reserved_param)

    if source.json_path:
        logger.info("Has JSON path (ignored by generated code): %s.%s", group_name, source.name)

    return_type = resolve_return_type(source.name, source.return_type, source.shape, config.tables())

    return Endpoint(
        group=group_name,
        name=source.name,
        method=source.method,
        return_type=return_type,
        source_return_type=source.return_type,
        url=source.url,
        reserved=reserved,
        required=tuple(required),
        optional=tuple(optional),
        description=source.description,
    )


def build_group(source: SourceGroup, config: GeneratorConfig | None = None) -> Group:
    return Group(
        name=source.name,
        description=source.description,
        endpoints=tuple(build_endpoint(source.name, ep, config) for ep in source.endpoints),
    )


def build_groups(sources: Sequence[SourceGroup], config: GeneratorConfig | None = None) -> list[Group]:
    """Build every group, keeping catalog order."""
    return [build_group(g, config) for g in sources]
