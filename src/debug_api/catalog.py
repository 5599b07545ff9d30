"""Immutable endpoint catalog, built once at startup and shared read-only."""

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from debug_api.builder import build_request
from debug_api.config import catalog_paths
from debug_api.errors import CatalogError
from debug_api.schema.base import EndpointDefinition, NodeKind, Request
from debug_api.schema.loader import load_endpoints


class EndpointCatalog:
    """Lookup table of endpoint definitions keyed by id."""

    def __init__(self, definitions: Iterable[EndpointDefinition]):
        by_id: dict[str, EndpointDefinition] = {}
        for d in definitions:
            if d.id in by_id:
                raise CatalogError(f"duplicate endpoint id: {d.id}")
            by_id[d.id] = d
        self._by_id = MappingProxyType(by_id)

    def __contains__(self, endpoint_id: object) -> bool:
        return endpoint_id in self._by_id

    def __iter__(self) -> Iterator[EndpointDefinition]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def ids(self) -> list[str]:
        return list(self._by_id)

    def get(self, endpoint_id: str) -> EndpointDefinition:
        try:
            return self._by_id[endpoint_id]
        except KeyError:
            raise CatalogError(f"unknown endpoint: {endpoint_id}") from None

    def for_component(self, kind: NodeKind) -> list[EndpointDefinition]:
        return [d for d in self._by_id.values() if d.component == kind]

    def build(self, endpoint_id: str, host: str, port: int, values: Mapping[str, str]) -> Request:
        """Build a request for the endpoint registered under ``endpoint_id``."""
        return build_request(self.get(endpoint_id), host, port, values)


def load_catalog(paths: Iterable[Path]) -> EndpointCatalog:
    """Load every ``*.yaml``/``*.yml`` file found at ``paths`` into one catalog."""
    definitions = []
    for path in paths:
        if path.is_dir():
            files = sorted([*path.glob("*.yaml"), *path.glob("*.yml")])
        elif path.exists():
            files = [path]
        else:
            raise CatalogError(f"catalog path does not exist: {path}")
        for f in files:
            definitions.extend(load_endpoints(f))
    return EndpointCatalog(definitions)


def default_catalog() -> EndpointCatalog:
    """Catalog from DEBUG_API_CATALOG, or the endpoints bundled with the package."""
    return load_catalog(catalog_paths())
