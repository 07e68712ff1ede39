"""Parameter classifier: splits catalog parameters into required and optional.

"Any one of" groups are collapsed into required parameters only when every
choice of alternatives ends up requiring the same names. Otherwise the
generated code cannot enforce the choice and the parameters become optional
setters.
"""

import itertools
from collections.abc import Iterable, Sequence
from typing import NamedTuple, TypeVar

from api_client_gen.parser.base import AnyOneOfGroup, ParamKind, SourceParameter

T = TypeVar("T")


class ClassificationError(ValueError):
    """Raised for parameter lists that contradict themselves."""


class Classification(NamedTuple):
    required: list[SourceParameter]
    optional: list[SourceParameter]


def cartesian_product(choices: Sequence[Sequence[T]]) -> list[tuple[T, ...]]:
    """Every way of picking one element from each sequence.

    An empty ``choices`` yields a single empty combination; any empty
    sequence inside it yields none.
    """
    return list(itertools.product(*choices))


def dedupe_parameters(params: Iterable[SourceParameter]) -> list[SourceParameter]:
    """Coalesce parameters sharing a real name; the first declaration wins."""
    seen: dict[str, SourceParameter] = {}
    for p in params:
        first = seen.get(p.name)
        if first is None:
            seen[p.name] = p
        elif first.type != p.type:
            raise ClassificationError(
                f"parameter '{p.name}' declared as both '{first.type}' and '{p.type}'"
            )
    return list(seen.values())


def collapsed_names(groups: Sequence[AnyOneOfGroup]) -> set[str]:
    """Names required by every combination of alternatives, or an empty set if the choice matters."""
    if any(not g.alternatives for g in groups):
        return set()

    combos = cartesian_product([g.alternatives for g in groups])
    flattened = [frozenset(name for alt in combo for name in alt) for combo in combos]
    if len(set(flattened)) == 1:
        return set(flattened[0])
    return set()


def classify_parameters(
    params: Sequence[SourceParameter], groups: Sequence[AnyOneOfGroup]
) -> Classification:
    """Classify parameters into required and optional lists, each in declaration order."""
    unique = dedupe_parameters(params)
    declared = {p.name for p in unique}

    for g in groups:
        for alt in g.alternatives:
            unknown = [name for name in alt if name not in declared]
            if unknown:
                raise ClassificationError(
                    f"any-one-of group {g.id} names undeclared parameter(s): {', '.join(unknown)}"
                )

    collapsed = collapsed_names(groups)

    required = []
    optional = []
    for p in unique:
        if p.kind == ParamKind.REQUIRED or (p.kind == ParamKind.EITHER and p.name in collapsed):
            required.append(p)
        else:
            optional.append(p)
    return Classification(required=required, optional=optional)
