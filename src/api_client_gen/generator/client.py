"""Client code emitter: renders endpoint models into a builder-style Rust client.

Output is produced in three passes over the catalog:

1. the top-level client, one client struct per group and a factory method
   per supported endpoint (unsupported endpoints get a comment instead);
2. one request builder struct per supported endpoint with fluent setters
   for its optional parameters;
3. an ``execute`` method per request builder.

The emitted text is meant to be ``include!``-ed into a module that already
imports the runtime (``Cow``, ``Authenticator``, ``HttpHandler``,
``ParameterValue``, the result type, the executor and the model types).
"""

import logging

from api_client_gen.config import GeneratorConfig
from api_client_gen.generator.naming import rust_ident, to_snake_case
from api_client_gen.generator.params import FnParameters, field_type, owned_expr, parameter_value
from api_client_gen.model.endpoint import PLACEHOLDER_RE, Endpoint, Group
from api_client_gen.model.types import Scalar, render_type

logger = logging.getLogger(__name__)

HEADER_COMMENT = "// This file is generated by api-client-gen. Do not edit."
CLIENT_FIELD = "_client"


def skip_reason(endpoint: Endpoint, config: GeneratorConfig) -> str | None:
    """Why an endpoint cannot be emitted, or None when it is supported."""
    if endpoint.return_type is None:
        return f"unsupported return type {endpoint.source_return_type}"
    if endpoint.method == config.manual_method:
        return "requires manual implementation"
    for p in endpoint.parameters:
        if isinstance(p.type, Scalar) and p.type.name in config.unsupported_transports:
            return f"{p.name}: {p.type.name} requires unsupported transport"
    return None


def _rust_str(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class ClientEmitter:
    """Generates the client source text for a list of groups."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()
        self._lines: list[str] = []

    # -- naming -----------------------------------------------------------

    def _group_client(self, group: Group) -> str:
        return f"{group.name}Client"

    def _builder_name(self, endpoint: Endpoint) -> str:
        return f"{endpoint.group}{endpoint.name}RequestBuilder"

    def _generic_decl(self, lifetime: bool = True) -> str:
        if lifetime:
            return "<'a, A: 'a + Authenticator, H: 'a + HttpHandler>"
        return "<A: Authenticator, H: HttpHandler>"

    def _impl_generics(self) -> str:
        return "<'a, A: Authenticator, H: HttpHandler>"

    def _client_ref(self) -> str:
        return f"&'a {self.config.client_name}<A, H>"

    def _supported(self, group: Group) -> list[Endpoint]:
        return [ep for ep in group.endpoints if skip_reason(ep, self.config) is None]

    def _emit(self, *lines: str) -> None:
        self._lines.extend(lines)

    # -- orchestration ----------------------------------------------------

    def generate(self, groups: list[Group]) -> str:
        """Render all groups. Identical input always gives identical output."""
        self._lines = []

        logger.debug("Pass 1: client surface for %d groups", len(groups))
        self._render_top_level_client(groups)
        for group in groups:
            self._render_group_client(group)

        logger.debug("Pass 2: request builders")
        for group in groups:
            for endpoint in self._supported(group):
                self._render_request_builder(endpoint)

        logger.debug("Pass 3: execute methods")
        for group in groups:
            for endpoint in self._supported(group):
                self._render_execute(endpoint)

        return "\n".join(self._lines) + "\n"

    # -- pass 1 -----------------------------------------------------------

    def _render_top_level_client(self, groups: list[Group]) -> None:
        name = self.config.client_name
        self._emit(
            HEADER_COMMENT,
            "",
            "#[derive(Clone, Debug)]",
            f"pub struct {name}{self._generic_decl(lifetime=False)} {{",
            "    pub auth: A,",
            "    pub handler: H,",
            "}",
            "",
            f"impl{self._generic_decl(lifetime=False)} {name}<A, H> {{",
            f"    pub fn new(auth: A, handler: H) -> {name}<A, H> {{",
            f"        {name} {{ auth: auth, handler: handler }}",
            "    }",
        )
        for group in groups:
            client = self._group_client(group)
            self._emit(
                "",
                f"    pub fn {to_snake_case(group.name)}(&self) -> {client}<A, H> {{",
                f"        {client} {{ client: self }}",
                "    }",
            )
        self._emit("}")

    def _render_group_client(self, group: Group) -> None:
        client = self._group_client(group)
        self._emit("")
        if group.description:
            self._render_doc(group.description, indent="")
        self._emit(
            "#[derive(Clone, Debug)]",
            f"pub struct {client}{self._generic_decl()} {{",
            f"    client: {self._client_ref()},",
            "}",
            "",
            f"impl{self._impl_generics()} {client}<'a, A, H> {{",
        )

        first = True
        for endpoint in group.endpoints:
            if not first:
                self._emit("")
            first = False

            reason = skip_reason(endpoint, self.config)
            if reason is not None:
                logger.warning("Skipping %s.%s: %s", group.name, endpoint.name, reason)
                self._emit(f"    // Not Implemented: {endpoint.name} ({reason})")
                continue
            self._render_factory(endpoint)

        self._emit("}")

    def _render_factory(self, endpoint: Endpoint) -> None:
        builder = self._builder_name(endpoint)
        fn_params = FnParameters()
        for p in endpoint.required:
            fn_params.add_parameter(rust_ident(p.name), p.type)

        if endpoint.description:
            self._render_doc(endpoint.description, indent="    ")
        self._emit(
            f"    pub fn {rust_ident(endpoint.name)}{fn_params.generics()}"
            f"(&self{fn_params.arguments()}) -> {builder}<'a, A, H> {{",
            f"        {builder} {{",
            f"            {CLIENT_FIELD}: self.client,",
        )
        for p in endpoint.required:
            ident = rust_ident(p.name)
            self._emit(f"            {ident}: {owned_expr(ident, p.type)},")
        for p in endpoint.optional:
            self._emit(f"            {rust_ident(p.name)}: None,")
        self._emit(
            "        }",
            "    }",
        )

    def _render_doc(self, content: str, indent: str) -> None:
        for line in content.strip().splitlines():
            self._emit(f"{indent}/// {line.strip()}".rstrip())

    # -- pass 2 -----------------------------------------------------------

    def _render_request_builder(self, endpoint: Endpoint) -> None:
        builder = self._builder_name(endpoint)
        self._emit(
            "",
            f"pub struct {builder}{self._generic_decl()} {{",
            f"    {CLIENT_FIELD}: {self._client_ref()},",
        )
        for p in endpoint.required:
            self._emit(f"    {rust_ident(p.name)}: {field_type(p.type)},")
        for p in endpoint.optional:
            self._emit(f"    {rust_ident(p.name)}: Option<{field_type(p.type)}>,")
        self._emit("}")

        if not endpoint.optional:
            return

        self._emit("", f"impl{self._impl_generics()} {builder}<'a, A, H> {{")
        for i, p in enumerate(endpoint.optional):
            if i > 0:
                self._emit("")
            self._render_setter(p.name, p.type)
        self._emit("}")

    def _render_setter(self, name, ref) -> None:
        ident = rust_ident(name)
        fn_params = FnParameters()
        fn_params.add_parameter("val", ref)
        self._emit(
            f"    pub fn {ident}{fn_params.generics()}(mut self{fn_params.arguments()}) -> Self {{",
            f"        self.{ident} = Some({owned_expr('val', ref)});",
            "        self",
            "    }",
        )

    # -- pass 3 -----------------------------------------------------------

    def _render_execute(self, endpoint: Endpoint) -> None:
        builder = self._builder_name(endpoint)
        result = f"{self.config.result_type}<{render_type(endpoint.return_type)}>"

        pushed = [p for p in endpoint.required if p.name != endpoint.reserved]
        mut = "mut " if pushed or endpoint.optional else ""

        self._emit(
            "",
            f"impl{self._impl_generics()} {builder}<'a, A, H> {{",
            f"    pub fn execute(&self) -> {result} {{",
            f"        let {mut}params = Vec::with_capacity({endpoint.param_capacity});",
        )
        for p in pushed:
            field = f"self.{rust_ident(p.name)}"
            value = parameter_value(field, f"&{field}", p.type)
            self._emit(f"        params.push((Cow::Borrowed({_rust_str(p.name)}), {value}));")
        for p in endpoint.optional:
            value = parameter_value("x", "x", p.type)
            self._emit(
                f"        if let Some(ref x) = self.{rust_ident(p.name)} {{",
                f"            params.push((Cow::Borrowed({_rust_str(p.name)}), {value}));",
                "        }",
            )

        self._emit(
            f"        {self.config.executor}(self.{CLIENT_FIELD}, {endpoint.method}, {self._url_expr(endpoint)}, params)",
            "    }",
            "}",
        )

    def _url_expr(self, endpoint: Endpoint) -> str:
        if endpoint.reserved is None:
            return _rust_str(endpoint.url)
        template, count = PLACEHOLDER_RE.subn("{}", endpoint.url)
        value = f"self.{rust_ident(endpoint.reserved)}"
        args = "".join(f", {value}" for _ in range(count))
        return f"format!({_rust_str(template)}{args})"
