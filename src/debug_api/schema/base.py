"""Data models describing debug API endpoints.

An endpoint is described once as a schema (path template, method, declared
path and query params) and the request builder turns caller-supplied
strings into a validated request against a specific host and port.
"""

from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from debug_api.errors import InvalidParam, TemplateError
from debug_api.schema.template import Segment, parse_template, placeholder_names

# Validates and/or normalizes one value; raises to reject it.
Transformer = Callable[[str], str]


class NodeKind(str, Enum):
    TIDB = "tidb"
    TIKV = "tikv"
    PD = "pd"
    TIFLASH = "tiflash"


class EndpointMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class ParamModel(BaseModel):
    """A reusable value kind (text, ip, ...) with its canonical transform."""

    model_config = ConfigDict(frozen=True)

    type: str
    transform: Transformer | None = Field(default=None, exclude=True, repr=False)


class EndpointParam(BaseModel):
    """A single path or query parameter declared by an endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = False
    model: ParamModel
    pre_transform: Transformer | None = Field(default=None, exclude=True, repr=False)
    post_transform: Transformer | None = Field(default=None, exclude=True, repr=False)

    def transform(self, value: str) -> str:
        """Run the pre -> model -> post pipeline over a raw value.

        The pre-transform always runs and may synthesize a default. An empty
        value after it means "not specified": the model and post stages are
        skipped and ``""`` is returned.

        Raises:
            InvalidParam: a stage rejected the value.
        """
        stages = (self.model.transform, self.post_transform)
        if self.pre_transform is not None:
            value = self._run(self.pre_transform, value)
        if not value:
            return ""
        for stage in stages:
            if stage is None:
                continue
            value = self._run(stage, value)
        return value

    def _run(self, stage: Transformer, value: str) -> str:
        try:
            result = stage(value)
        except Exception as e:
            raise InvalidParam(self.name, e) from e
        if not isinstance(result, str):
            raise InvalidParam(
                self.name, TypeError(f"transform returned {type(result).__name__}, expected str")
            )
        return result


class EndpointDefinition(BaseModel):
    """A catalog entry for one debug endpoint of a cluster component."""

    model_config = ConfigDict(frozen=True)

    id: str
    component: NodeKind
    method: EndpointMethod = EndpointMethod.GET
    path: str  # /stats/dump/{db}/{table}
    path_params: tuple[EndpointParam, ...] = ()
    query_params: tuple[EndpointParam, ...] = ()
    description: str = ""

    _segments: tuple[Segment, ...] = PrivateAttr(default=())

    def model_post_init(self, __context) -> None:
        segments = parse_template(self.path)
        _check_unique(self.id, "path", self.path_params)
        _check_unique(self.id, "query", self.query_params)

        used = set(placeholder_names(segments))
        declared = {p.name for p in self.path_params}
        if used - declared:
            raise TemplateError(
                f"endpoint {self.id}: placeholders without path param: {sorted(used - declared)}"
            )
        if declared - used:
            raise TemplateError(
                f"endpoint {self.id}: path params not used in {self.path}: {sorted(declared - used)}"
            )
        self._segments = segments

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def placeholders(self) -> list[str]:
        return placeholder_names(self._segments)


class Request(BaseModel):
    """A fully resolved request, ready to hand to an HTTP client."""

    model_config = ConfigDict(frozen=True)

    method: EndpointMethod
    host: str
    port: int
    path: str
    query: str = ""

    def url(self, scheme: str = "http") -> str:
        url = f"{scheme}://{_netloc(self.host)}:{self.port}{self.path}"
        if self.query:
            url += f"?{self.query}"
        return url


def _check_unique(endpoint_id: str, kind: str, params: tuple[EndpointParam, ...]) -> None:
    seen = set()
    for p in params:
        if p.name in seen:
            raise TemplateError(f"endpoint {endpoint_id}: duplicate {kind} param {p.name}")
        seen.add(p.name)


def _netloc(host: str) -> str:
    # Bare IPv6 literals need brackets inside a URL.
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host
