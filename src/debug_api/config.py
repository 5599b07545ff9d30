"""Runtime configuration read from the environment."""

import os
from pathlib import Path

from debug_api.schema.base import NodeKind

BUNDLED_ENDPOINTS_DIR = Path(__file__).parent / "endpoints"

# Status ports the components serve their debug endpoints on.
DEFAULT_PORTS = {
    NodeKind.TIDB: 10080,
    NodeKind.TIKV: 20180,
    NodeKind.PD: 2379,
    NodeKind.TIFLASH: 20292,
}


def catalog_paths() -> list[Path]:
    """Catalog files/directories from DEBUG_API_CATALOG, else the bundled ones."""
    raw = os.getenv("DEBUG_API_CATALOG", "")
    paths = [Path(p) for p in raw.split(os.pathsep) if p]
    return paths or [BUNDLED_ENDPOINTS_DIR]


def default_scheme() -> str:
    return os.getenv("DEBUG_API_SCHEME", "http")
