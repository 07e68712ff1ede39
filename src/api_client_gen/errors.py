"""Exception types raised by the generator.

Unsupported endpoints are not errors: they are skipped and annotated in the
emitted output. Only catalogs that contradict themselves abort a run.
"""


class ClientgenError(Exception):
    """Base class for every error raised by api-client-gen."""


class CatalogError(ClientgenError):
    """An endpoint descriptor violates a structural invariant."""

    def __init__(self, group: str, endpoint: str, message: str):
        super().__init__(f"{group}.{endpoint}: {message}")
        self.group = group
        self.endpoint = endpoint
        self.message = message


class TemplateParseError(ClientgenError):
    """A catalog file could not be read into endpoint descriptors."""

    def __init__(self, file_name: str, message: str, position: tuple[int, int] | None = None):
        self.file_name = file_name
        self.message = message
        self.position = position
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.position is not None:
            line, column = self.position
            return f"{self.file_name} {line}:{column} {self.message}"
        return f"{self.file_name} {self.message}"


class ConfigError(ClientgenError):
    """The generator configuration file is invalid."""
