"""Built-in parameter models and transform helpers for catalog authors."""

import ipaddress
import re
from datetime import datetime
from types import MappingProxyType
from urllib.parse import quote

from debug_api.errors import CatalogError, ParamFormatError
from debug_api.schema.base import ParamModel, Transformer

_HOSTNAME = re.compile(r"(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.(?!-)[A-Za-z0-9-]{1,63}(?<!-))*")
_DATETIME = re.compile(r"[0-9]{14}")


def _to_ip(value: str) -> str:
    try:
        ip = ipaddress.ip_address(value)
    except ValueError:
        raise ParamFormatError(f"invalid ip format, input: {value}") from None
    # A zone suffix such as "%eth0" would put a raw '%' into the path.
    if getattr(ip, "scope_id", None):
        raise ParamFormatError(f"scoped ip addresses are not supported, input: {value}")
    return value


def _to_host(value: str) -> str:
    if _HOSTNAME.fullmatch(value):
        return value
    return _to_ip(value)


def _to_int(value: str) -> str:
    try:
        return str(int(value.strip()))
    except ValueError:
        raise ParamFormatError(f"invalid integer, input: {value}") from None


def _to_table_id(value: str) -> str:
    value = _to_int(value)
    if int(value) < 0:
        raise ParamFormatError(f"table id must not be negative, input: {value}")
    return value


def _to_datetime(value: str) -> str:
    # yyyyMMddHHmmss
    if not _DATETIME.fullmatch(value):
        raise ParamFormatError(f"invalid datetime, expected yyyyMMddHHmmss, input: {value}")
    try:
        datetime.strptime(value, "%Y%m%d%H%M%S")
    except ValueError:
        raise ParamFormatError(f"invalid datetime, input: {value}") from None
    return value


def _to_path_segment(value: str) -> str:
    # Names may hold '/', '?' or spaces; keep them inside one path segment.
    return quote(value, safe="")


TEXT = ParamModel(type="text")
INT = ParamModel(type="int", transform=_to_int)
IP = ParamModel(type="ip", transform=_to_ip)
HOST = ParamModel(type="host", transform=_to_host)
DB = ParamModel(type="db", transform=_to_path_segment)
TABLE = ParamModel(type="table", transform=_to_path_segment)
TABLE_ID = ParamModel(type="table_id", transform=_to_table_id)
DATETIME = ParamModel(type="datetime", transform=_to_datetime)

PARAM_MODELS = MappingProxyType({m.type: m for m in (TEXT, INT, IP, HOST, DB, TABLE, TABLE_ID, DATETIME)})


def get_model(type_: str) -> ParamModel:
    """Look up a built-in parameter model by its type tag."""
    try:
        return PARAM_MODELS[type_]
    except KeyError:
        raise CatalogError(
            f"unknown param model {type_!r}, expected one of {sorted(PARAM_MODELS)}"
        ) from None


def default_value(default: str) -> Transformer:
    """Pre-transform that substitutes ``default`` for an empty value."""

    def transform(value: str) -> str:
        return value or default

    return transform


def affix(prefix: str = "", suffix: str = "") -> Transformer:
    """Post-transform wrapping the value, e.g. ``affix(suffix=":10080")``."""

    def transform(value: str) -> str:
        return f"{prefix}{value}{suffix}"

    return transform
