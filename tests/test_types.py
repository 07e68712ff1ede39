import pytest

from api_client_gen.model.types import (
    TEXT,
    VOID,
    CollectionOf,
    Scalar,
    Text,
    Void,
    describe_type,
    render_type,
    resolve_type,
)


class TestResolveType:
    @pytest.mark.parametrize("source, expected", [
        ("int", Scalar(name="i32")),
        ("long", Scalar(name="i64")),
        ("ulong", Scalar(name="u64")),
        ("double", Scalar(name="f64")),
        ("bool", Scalar(name="bool")),
        ("string", TEXT),
    ])
    def test_primitives(self, source, expected):
        assert resolve_type(source) == expected

    def test_unknown_name_passes_through(self):
        assert resolve_type("TweetMode") == Scalar(name="TweetMode")

    def test_enumerable_of_long(self):
        assert resolve_type("IEnumerable<long>") == CollectionOf(item=Scalar(name="i64"))

    def test_any_single_argument_generic_is_a_collection(self):
        assert resolve_type("List<string>") == CollectionOf(item=TEXT)
        assert resolve_type("Sequence<Widget>") == CollectionOf(item=Scalar(name="Widget"))

    def test_array_syntax(self):
        assert resolve_type("long[]") == CollectionOf(item=Scalar(name="i64"))

    def test_nested_collections(self):
        ref = resolve_type("IEnumerable<IEnumerable<string>>")
        assert ref == CollectionOf(item=CollectionOf(item=TEXT))

    def test_two_argument_generic_is_opaque(self):
        ref = resolve_type("Dictionary<string, long>")
        assert isinstance(ref, Scalar)
        assert ref.name == "Dictionary<string, long>"

    def test_never_resolves_to_void(self):
        for name in ("void", "Void", "()", "IEnumerable<void>"):
            ref = resolve_type(name)
            assert not isinstance(ref, Void)

    def test_is_referentially_transparent(self):
        assert resolve_type("IEnumerable<string>") == resolve_type("IEnumerable<string>")
        assert resolve_type("Widget") == resolve_type("Widget")

    def test_variants_are_immutable(self):
        ref = Scalar(name="i32")
        with pytest.raises(Exception):
            ref.name = "i64"


class TestRenderType:
    def test_render(self):
        assert render_type(Scalar(name="i32")) == "i32"
        assert render_type(Text()) == "String"
        assert render_type(CollectionOf(item=TEXT)) == "Vec<String>"
        assert render_type(VOID) == "()"

    def test_describe_collection(self):
        assert describe_type(CollectionOf(item=Scalar(name="Tweet"))) == "a collection of Tweet"
        assert describe_type(VOID) == "nothing"
