"""YAML endpoint catalog loader.

Parses catalog files into EndpointDefinition models. A catalog file looks
like::

    endpoints:
      - id: tidb_stats_dump
        component: tidb
        path: /stats/dump/{db}/{table}
        path_params:
          - {name: db, model: db}
          - {name: table, model: table}
        query_params:
          - {name: seconds, model: int, default: "10"}
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from debug_api.errors import CatalogError, TemplateError
from debug_api.schema.base import EndpointDefinition, EndpointParam
from debug_api.schema.models import affix, default_value, get_model


def load_endpoints(file_path: Path) -> list[EndpointDefinition]:
    """Parse a catalog YAML file into a list of EndpointDefinition.

    A file with no entries (``endpoints:`` left empty) loads as an empty list.
    """
    try:
        doc = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"{file_path}: {e}") from e

    entries = doc.get("endpoints") if isinstance(doc, dict) else None
    if not isinstance(doc, dict) or not isinstance(entries or [], list):
        raise CatalogError(f"{file_path}: expected a mapping with an 'endpoints' list")

    endpoints = []
    for index, entry in enumerate(entries or []):
        label = entry.get("id", f"#{index}") if isinstance(entry, dict) else f"#{index}"
        try:
            endpoints.append(_parse_endpoint(entry))
        except (CatalogError, TemplateError, ValidationError, AttributeError, TypeError, KeyError) as e:
            raise CatalogError(f"{file_path}: endpoint {label}: {e}") from e
    return endpoints


def _parse_endpoint(entry: dict) -> EndpointDefinition:
    if not isinstance(entry, dict):
        raise TypeError(f"expected a mapping, got {type(entry).__name__}")
    return EndpointDefinition(
        id=entry["id"],
        component=entry["component"],
        method=str(entry.get("method", "GET")).upper(),
        path=entry["path"],
        path_params=_parse_params(entry.get("path_params") or []),
        query_params=_parse_params(entry.get("query_params") or []),
        description=entry.get("description", ""),
    )


def _parse_params(params: list[dict]) -> tuple[EndpointParam, ...]:
    result = []
    for p in params:
        pre = None
        if p.get("default") is not None:
            pre = default_value(str(p["default"]))

        post = None
        if p.get("prefix") or p.get("suffix"):
            post = affix(str(p.get("prefix", "")), str(p.get("suffix", "")))

        result.append(
            EndpointParam(
                name=p["name"],
                required=p.get("required", False),
                model=get_model(p.get("model", "text")),
                pre_transform=pre,
                post_transform=post,
            )
        )
    return tuple(result)
