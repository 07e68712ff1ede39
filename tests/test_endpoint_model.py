import logging

import pytest

from api_client_gen.config import GeneratorConfig
from api_client_gen.errors import CatalogError
from api_client_gen.model.endpoint import build_endpoint, build_groups, find_reserved_parameter
from api_client_gen.model.types import TEXT, CollectionOf, Scalar
from api_client_gen.parser.base import AnyOneOfGroup, ResponseShape, SourceGroup


class TestBuildEndpoint:
    def test_scenario_a_two_required_parameters(self, make_endpoint, make_param):
        source = make_endpoint(params=[make_param("a", "int", "required"), make_param("b", "string", "required")])
        ep = build_endpoint("Widgets", source)
        assert [p.name for p in ep.required] == ["a", "b"]
        assert ep.required[0].type == Scalar(name="i32")
        assert ep.required[1].type == TEXT
        assert ep.optional == ()
        assert ep.return_type == Scalar(name="Widget")
        assert ep.reserved is None
        assert ep.param_capacity == 2

    def test_scenario_b_listed_tweet(self, make_endpoint):
        ep = build_endpoint("Statuses", make_endpoint(return_type="Status", shape=ResponseShape.LISTED))
        assert ep.return_type == CollectionOf(item=Scalar(name="Tweet"))

    def test_scenario_c_denylisted_return(self, make_endpoint):
        ep = build_endpoint("Users", make_endpoint(name="Suggestions", return_type="Category"))
        assert ep.return_type is None
        assert ep.source_return_type == "Category"

    def test_reserved_parameter_is_derived_from_url(self, make_endpoint, make_param):
        source = make_endpoint(url="users/{id}/show", params=[make_param("id", "long", "required")])
        ep = build_endpoint("Users", source)
        assert ep.reserved == "id"
        assert ep.param_capacity == 0

    def test_explicit_reserved_parameter(self, make_endpoint, make_param):
        source = make_endpoint(
            url="lists/{slug}.json", reserved="slug",
            params=[make_param("owner", "string", "required"), make_param("slug", "string", "required")],
        )
        ep = build_endpoint("Lists", source)
        assert ep.reserved == "slug"
        assert ep.param_capacity == 1

    def test_optional_reserved_parameter_is_promoted(self, make_endpoint, make_param):
        source = make_endpoint(
            url="statuses/{id}.json",
            params=[make_param("count", "int", "required"), make_param("id", "long", "optional")],
        )
        ep = build_endpoint("Statuses", source)
        assert [p.name for p in ep.required] == ["count", "id"]
        assert ep.optional == ()

    def test_reserved_parameter_must_be_declared(self, make_endpoint):
        with pytest.raises(CatalogError, match="reserved parameter 'id'") as exc:
            build_endpoint("Users", make_endpoint(url="users/{id}/show"))
        assert exc.value.group == "Users"
        assert exc.value.endpoint == "Show"

    def test_reserved_parameter_needs_placeholder(self, make_endpoint, make_param):
        source = make_endpoint(reserved="id", params=[make_param("id", "long", "required")])
        with pytest.raises(CatalogError, match="no placeholder"):
            build_endpoint("Users", source)

    def test_collection_reserved_parameter_is_rejected(self, make_endpoint, make_param):
        source = make_endpoint(url="users/{ids}", params=[make_param("ids", "IEnumerable<long>", "required")])
        with pytest.raises(CatalogError, match="collection"):
            build_endpoint("Users", source)

    def test_conflicting_duplicate_is_a_catalog_error(self, make_endpoint, make_param):
        source = make_endpoint(params=[make_param("id", "long"), make_param("id", "string")])
        with pytest.raises(CatalogError):
            build_endpoint("Users", source)

    def test_derived_any_one_of_groups(self, make_endpoint, make_param):
        source = make_endpoint(params=[
            make_param("user_id", "long", "either"),
            make_param("screen_name", "string", "either"),
        ])
        ep = build_endpoint("Users", source)
        assert ep.required == ()
        assert [p.name for p in ep.optional] == ["user_id", "screen_name"]

    def test_single_either_collapses_to_required(self, make_endpoint, make_param):
        source = make_endpoint(params=[make_param("id", "long", "either"), make_param("count", "int")])
        ep = build_endpoint("Users", source)
        assert [p.name for p in ep.required] == ["id"]

    def test_explicit_any_one_of_groups(self, make_endpoint, make_param):
        source = make_endpoint(
            params=[make_param("lat", "double", "either"), make_param("long", "double", "either")],
            any_one_of=[AnyOneOfGroup(id=0, alternatives=[["lat", "long"]])],
        )
        ep = build_endpoint("Geo", source)
        assert [p.name for p in ep.required] == ["lat", "long"]

    def test_json_path_is_logged(self, make_endpoint, caplog):
        with caplog.at_level(logging.INFO, logger="api_client_gen"):
            build_endpoint("Help", make_endpoint(json_path="resources"))
        assert "Has JSON path" in caplog.text

    def test_endpoint_is_immutable(self, make_endpoint):
        ep = build_endpoint("Widgets", make_endpoint())
        with pytest.raises(Exception):
            ep.name = "Other"

    def test_config_tables_are_used(self, make_endpoint):
        config = GeneratorConfig(extra_unsupported=["Widget"])
        assert build_endpoint("Widgets", make_endpoint(), config).return_type is None


class TestBuildGroups:
    def test_order_is_preserved(self, make_endpoint):
        sources = [
            SourceGroup(name="Zeta", endpoints=[make_endpoint(name="B"), make_endpoint(name="A")]),
            SourceGroup(name="Alpha", endpoints=[make_endpoint(name="C")]),
        ]
        groups = build_groups(sources)
        assert [g.name for g in groups] == ["Zeta", "Alpha"]
        assert [e.name for e in groups[0].endpoints] == ["B", "A"]
        assert groups[0].endpoints[0].group == "Zeta"


class TestFindReservedParameter:
    def test_first_placeholder(self):
        assert find_reserved_parameter("a/{id}/b/{other}") == "id"

    def test_no_placeholder(self):
        assert find_reserved_parameter("a/b.json") is None
