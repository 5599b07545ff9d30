import pytest
from pydantic import ValidationError

from debug_api.errors import InvalidParam, TemplateError
from debug_api.schema.base import (
    EndpointDefinition,
    EndpointMethod,
    EndpointParam,
    NodeKind,
    ParamModel,
    Request,
)
from debug_api.schema.models import IP, TEXT, affix, default_value
from debug_api.schema.template import Literal, Placeholder


def _param(name: str, **kwargs) -> EndpointParam:
    kwargs.setdefault("model", TEXT)
    return EndpointParam(name=name, **kwargs)


class TestEndpointParam:
    def test_create_minimal_param(self):
        p = _param("db")
        assert p.required is False
        assert p.pre_transform is None
        assert p.post_transform is None

    def test_model_is_shared_by_reference(self):
        a = _param("db", model=IP)
        b = _param("addr", model=IP)
        assert a.model is b.model is IP

    def test_params_are_immutable(self):
        p = _param("db")
        with pytest.raises(ValidationError):
            p.name = "other"

    def test_pipeline_runs_pre_model_post_in_order(self):
        calls = []

        def stage(tag):
            def transform(value):
                calls.append(tag)
                return f"{value}-{tag}"
            return transform

        p = EndpointParam(
            name="x",
            model=ParamModel(type="custom", transform=stage("model")),
            pre_transform=stage("pre"),
            post_transform=stage("post"),
        )
        assert p.transform("v") == "v-pre-model-post"
        assert calls == ["pre", "model", "post"]

    def test_ip_with_port_suffix(self):
        p = _param("tidb_ip", model=IP, post_transform=affix(suffix=":10080"))
        assert p.transform("10.0.0.1") == "10.0.0.1:10080"

    def test_invalid_ip_is_wrapped(self):
        p = _param("tidb_ip", model=IP, post_transform=affix(suffix=":10080"))
        with pytest.raises(InvalidParam) as exc:
            p.transform("not-an-ip")
        assert exc.value.param == "tidb_ip"
        assert isinstance(exc.value.__cause__, ValueError)

    def test_failing_stage_stops_pipeline(self):
        post_calls = []

        def reject(value):
            raise ValueError("nope")

        p = _param("x", pre_transform=reject, post_transform=post_calls.append)
        with pytest.raises(InvalidParam):
            p.transform("v")
        assert post_calls == []

    def test_non_str_stage_result_rejected(self):
        p = _param("seconds", post_transform=lambda value: int(value))
        with pytest.raises(InvalidParam) as exc:
            p.transform("10")
        assert exc.value.param == "seconds"
        assert isinstance(exc.value.cause, TypeError)

    def test_none_stage_result_is_not_absent(self):
        p = _param("seconds", pre_transform=lambda value: None)
        with pytest.raises(InvalidParam):
            p.transform("")

    def test_empty_value_skips_model_and_post(self):
        p = _param("tidb_ip", model=IP, post_transform=affix(suffix=":10080"))
        assert p.transform("") == ""

    def test_pre_transform_default_feeds_later_stages(self):
        p = _param("ip", model=IP, pre_transform=default_value("127.0.0.1"), post_transform=affix(suffix=":1"))
        assert p.transform("") == "127.0.0.1:1"


class TestEndpointDefinition:
    def test_create_minimal_endpoint(self):
        ep = EndpointDefinition(id="tidb_info", component="tidb", path="/info")
        assert ep.method == EndpointMethod.GET
        assert ep.component == NodeKind.TIDB
        assert ep.segments == (Literal("/info"),)
        assert ep.placeholders == []

    def test_segments_are_tokenized_at_construction(self):
        ep = EndpointDefinition(
            id="tidb_schema_db_table",
            component=NodeKind.TIDB,
            path="/schema/{db}/{table}",
            path_params=(_param("db"), _param("table")),
        )
        assert ep.segments == (
            Literal("/schema/"), Placeholder("db"), Literal("/"), Placeholder("table"),
        )
        assert ep.placeholders == ["db", "table"]

    def test_placeholder_without_param_rejected(self):
        with pytest.raises(TemplateError, match="table"):
            EndpointDefinition(
                id="bad", component="tidb", path="/schema/{db}/{table}", path_params=(_param("db"),)
            )

    def test_unused_path_param_rejected(self):
        with pytest.raises(TemplateError, match="extra"):
            EndpointDefinition(
                id="bad", component="tidb", path="/schema/{db}", path_params=(_param("db"), _param("extra"))
            )

    def test_duplicate_query_param_rejected(self):
        with pytest.raises(TemplateError, match="duplicate"):
            EndpointDefinition(
                id="bad", component="pd", path="/x", query_params=(_param("limit"), _param("limit"))
            )

    def test_repeated_placeholder_needs_one_param(self):
        ep = EndpointDefinition(
            id="twice", component="pd", path="/{id}/again/{id}", path_params=(_param("id"),)
        )
        assert ep.placeholders == ["id"]

    def test_serialization_skips_transforms(self):
        ep = EndpointDefinition(
            id="store", component="pd", path="/stores/{addr}",
            path_params=(_param("addr", model=IP, post_transform=affix(suffix=":20160")),),
        )
        data = ep.model_dump(mode="json")
        assert data["component"] == "pd"
        assert data["path_params"][0] == {"name": "addr", "required": False, "model": {"type": "ip"}}


class TestRequest:
    def test_url_with_query(self):
        req = Request(method="GET", host="10.0.0.1", port=10080, path="/debug/pprof/profile", query="seconds=10")
        assert req.url() == "http://10.0.0.1:10080/debug/pprof/profile?seconds=10"

    def test_url_without_query(self):
        req = Request(method="GET", host="tidb-0", port=10080, path="/info")
        assert req.url("https") == "https://tidb-0:10080/info"

    def test_ipv6_host_is_bracketed(self):
        req = Request(method="GET", host="::1", port=2379, path="/pd/api/v1/config")
        assert req.url() == "http://[::1]:2379/pd/api/v1/config"
