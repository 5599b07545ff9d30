"""Request builder: turns an endpoint definition and raw values into a Request.

Building is a pure, fail-fast function: the first invalid value or missing
binding aborts the whole build and nothing is partially returned.
"""

from collections.abc import Iterable, Mapping
from urllib.parse import urlencode

from debug_api.errors import MissingRequiredParam
from debug_api.schema.base import EndpointDefinition, EndpointParam, Request
from debug_api.schema.template import Literal


def transform_values(params: Iterable[EndpointParam], values: Mapping[str, str]) -> dict[str, str]:
    """Run every declared param through its pipeline.

    Params whose final value is empty are left out of the result.
    """
    result = {}
    for param in params:
        value = param.transform(values.get(param.name) or "")
        if value:
            result[param.name] = value
    return result


def populate_path(definition: EndpointDefinition, values: Mapping[str, str]) -> str:
    """Substitute placeholders with transformed values.

    Every placeholder is required whatever its param's ``required`` flag says.
    Values are inserted verbatim; escaping is up to the model transforms.
    """
    parts = []
    for seg in definition.segments:
        if isinstance(seg, Literal):
            parts.append(seg.text)
            continue
        value = values.get(seg.name)
        if not value:
            raise MissingRequiredParam(seg.name, template=definition.path)
        parts.append(value)
    return "".join(parts)


def encode_query(params: Iterable[EndpointParam], values: Mapping[str, str]) -> str:
    """Encode transformed query values, omitting absent optional params."""
    pairs = []
    for param in params:
        value = values.get(param.name)
        if not value:
            if param.required:
                raise MissingRequiredParam(param.name)
            continue
        pairs.append((param.name, value))
    return urlencode(pairs)


def build_request(
    definition: EndpointDefinition,
    host: str,
    port: int,
    values: Mapping[str, str],
) -> Request:
    """Build a validated request for ``definition`` against ``host:port``.

    Raises:
        InvalidParam: a transform stage rejected a value.
        MissingRequiredParam: a placeholder or required query param is unset.
    """
    path_values = transform_values(definition.path_params, values)
    path = populate_path(definition, path_values)

    query_values = transform_values(definition.query_params, values)
    query = encode_query(definition.query_params, query_values)

    return Request(
        method=definition.method,
        host=host,
        port=port,
        path=path,
        query=query,
    )
