# models.py
# Plain containers for what the query runner sends and receives.
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class CellKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class CellValue:
    kind: CellKind
    value: Any = None

    @classmethod
    def from_json(cls, raw: Any) -> "CellValue":
        # bool before int: True is an int in Python
        if raw is None:
            return cls(CellKind.NULL)
        if isinstance(raw, bool):
            return cls(CellKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            return cls(CellKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(CellKind.STRING, raw)
        return cls(CellKind.STRING, json.dumps(raw, separators=(",", ":")))


def _json_list(raw: Any, what: str) -> list:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise TypeError(f"{what} must be a JSON array, got {type(raw).__name__}")
    return raw


@dataclass(frozen=True)
class Connection:
    name: str
    db_type: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Connection":
        return cls(name=str(data["name"]), db_type=str(data.get("db_type", "")))


@dataclass(frozen=True)
class PluginSummary:
    name: str
    description: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PluginSummary":
        return cls(name=str(data["name"]), description=str(data.get("description") or ""))


@dataclass(frozen=True)
class Parameter:
    name: str
    parameter_type: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Parameter":
        # the server writes the type under "type"
        ptype = data.get("parameter_type", data.get("type", ""))
        return cls(name=str(data["name"]), parameter_type=str(ptype or ""))


@dataclass(frozen=True)
class PluginMetadata:
    name: str
    description: str
    parameters: List[Parameter] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PluginMetadata":
        return cls(
            name=str(data["name"]),
            description=str(data.get("description") or ""),
            parameters=[Parameter.from_json(p) for p in data.get("parameters") or []],
        )


@dataclass
class RunRequest:
    plugin: str
    connection: Optional[str]
    variables: Dict[str, str] = field(default_factory=dict)


@dataclass
class QueryResult:
    names: List[str]
    values: List[List[CellValue]]
    message: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "QueryResult":
        """
        Decode a run response. A bare JSON string (e.g. "no results returned")
        becomes an empty result carrying that message.
        Row widths are not checked against `names`.
        """
        if isinstance(data, str):
            return cls(names=[], values=[], message=data)
        names = [str(n) for n in _json_list(data.get("names"), "names")]
        rows = _json_list(data.get("values"), "values")
        values = [[CellValue.from_json(v) for v in _json_list(row, "row")] for row in rows]
        return cls(names=names, values=values)
