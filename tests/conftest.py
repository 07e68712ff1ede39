import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from api_client_gen.log import LOGGER_NAME
from api_client_gen.parser.base import ParamKind, SourceEndpoint, SourceParameter

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """CLI runs install a handler and stop propagation; undo that between tests."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def make_param() -> Callable[..., SourceParameter]:
    def _make_param(name: str, type: str = "int", kind: str = "optional", group: int = 0) -> SourceParameter:
        return SourceParameter(name=name, type=type, kind=ParamKind(kind), group=group)

    return _make_param


@pytest.fixture
def make_endpoint() -> Callable[..., SourceEndpoint]:
    def _make_endpoint(**overrides: object) -> SourceEndpoint:
        defaults: dict[str, object] = dict(
            name="Show",
            method="Get",
            url="https://api.example.com/widgets/show.json",
            return_type="Widget",
            params=[],
        )
        defaults.update(overrides)
        return SourceEndpoint(**defaults)

    return _make_endpoint
