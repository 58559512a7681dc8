"""
Typed view of an editor API description.

The decoded document is a plain tree of dicts and lists. These
dataclasses give the parts that matter (version, functions, UI
events, object types) names and types so they can be inspected
without digging through nested dictionaries.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from .errors import ModelError


@dataclass
class Version:
    """Editor and API version information."""
    major: int
    minor: int
    patch: int
    api_level: int
    api_compatible: int
    api_prerelease: bool = False
    prerelease: bool = False
    build: Optional[str] = None

    @property
    def semver(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-dev"
        return text

    @classmethod
    def from_dict(cls, data: dict) -> "Version":
        _require_mapping(data, "version")
        try:
            return cls(
                major=data["major"],
                minor=data["minor"],
                patch=data["patch"],
                api_level=data["api_level"],
                api_compatible=data["api_compatible"],
                api_prerelease=bool(data.get("api_prerelease", False)),
                prerelease=bool(data.get("prerelease", False)),
                build=data.get("build"),
            )
        except KeyError as e:
            raise ModelError(f"version is missing {e.args[0]!r}") from e


@dataclass
class TypeName:
    """
    A parameter or return type as written in the API description.

    ``ArrayOf(Integer, 2)`` is a fixed array, ``ArrayOf(String)`` a
    dynamic one, and anything else (``Buffer``, ``Dict(keymap)``) is kept
    as a plain name.
    """
    name: str
    is_array: bool = False
    size: Optional[int] = None  # Only set for fixed arrays

    ARRAY_PATTERN = re.compile(r"^ArrayOf\(\s*(\w+)\s*(?:,\s*(\d+)\s*)?\)$")

    @classmethod
    def parse(cls, text: str) -> "TypeName":
        if not isinstance(text, str):
            raise ModelError(f"type name must be a string, got {text!r}")
        match = cls.ARRAY_PATTERN.match(text)
        if not match:
            return cls(name=text)
        size = match.group(2)
        return cls(name=match.group(1), is_array=True, size=int(size) if size else None)

    @property
    def is_fixed_array(self) -> bool:
        return self.is_array and self.size is not None

    def __str__(self) -> str:
        if not self.is_array:
            return self.name
        if self.size is None:
            return f"ArrayOf({self.name})"
        return f"ArrayOf({self.name}, {self.size})"


@dataclass
class Parameter:
    type_name: TypeName
    name: str

    @classmethod
    def from_pair(cls, pair) -> "Parameter":
        if not isinstance(pair, list) or len(pair) != 2:
            raise ModelError(f"parameter must be a [type, name] pair, got {pair!r}")
        type_name, name = pair
        return cls(type_name=TypeName.parse(type_name), name=name)


@dataclass
class Function:
    """An API function such as ``nvim_buf_get_lines``."""
    name: str
    parameters: list[Parameter]
    return_type: TypeName
    since: int
    method: bool = False
    deprecated_since: Optional[int] = None

    @property
    def is_deprecated(self) -> bool:
        return self.deprecated_since is not None

    @classmethod
    def from_dict(cls, data: dict) -> "Function":
        _require_mapping(data, "function")
        try:
            return cls(
                name=data["name"],
                parameters=_parameters(data),
                return_type=TypeName.parse(data["return_type"]),
                since=data["since"],
                method=bool(data.get("method", False)),
                deprecated_since=data.get("deprecated_since"),
            )
        except KeyError as e:
            raise ModelError(f"function {data.get('name', '?')} is missing {e.args[0]!r}") from e


@dataclass
class UiEvent:
    """A UI event the editor can send to attached clients."""
    name: str
    parameters: list[Parameter]
    since: int

    @classmethod
    def from_dict(cls, data: dict) -> "UiEvent":
        _require_mapping(data, "ui event")
        try:
            return cls(
                name=data["name"],
                parameters=_parameters(data),
                since=data["since"],
            )
        except KeyError as e:
            raise ModelError(f"ui event {data.get('name', '?')} is missing {e.args[0]!r}") from e


@dataclass
class TypeInfo:
    """A remote object type: its extension code and function prefix."""
    id: int
    prefix: str


@dataclass
class ApiInfo:
    """The whole API description."""
    version: Version
    functions: list[Function]
    ui_events: list[UiEvent] = field(default_factory=list)
    ui_options: list[str] = field(default_factory=list)
    types: dict[str, TypeInfo] = field(default_factory=dict)
    error_types: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document) -> "ApiInfo":
        """
        Build the typed view from a decoded document.

        Raises:
            ModelError: If required sections are missing or malformed.
        """
        _require_mapping(document, "API description")
        for key in ("version", "functions"):
            if key not in document:
                raise ModelError(f"API description is missing {key!r}")

        types = {}
        for name, info in _require_mapping(document.get("types", {}), "types").items():
            _require_mapping(info, f"type {name}")
            try:
                types[name] = TypeInfo(id=info["id"], prefix=info["prefix"])
            except KeyError as e:
                raise ModelError(f"type {name} is missing {e.args[0]!r}") from e

        error_types = {}
        for name, info in _require_mapping(document.get("error_types", {}), "error_types").items():
            _require_mapping(info, f"error type {name}")
            if "id" not in info:
                raise ModelError(f"error type {name} is missing 'id'")
            error_types[name] = info["id"]

        functions = _require_list(document["functions"], "functions")
        ui_events = _require_list(document.get("ui_events", []), "ui_events")

        return cls(
            version=Version.from_dict(document["version"]),
            functions=[Function.from_dict(f) for f in functions],
            ui_events=[UiEvent.from_dict(e) for e in ui_events],
            ui_options=list(_require_list(document.get("ui_options", []), "ui_options")),
            types=types,
            error_types=error_types,
        )

    def get_function(self, name: str) -> Optional[Function]:
        for function in self.functions:
            if function.name == name:
                return function
        return None

    def functions_since(self, api_level: int) -> list[Function]:
        """Functions introduced at or after the given API level."""
        return [f for f in self.functions if f.since >= api_level]

    def methods_of(self, type_name: str) -> list[Function]:
        """Functions whose name starts with the prefix of a remote type."""
        info = self.types.get(type_name)
        if info is None:
            return []
        return [f for f in self.functions if f.name.startswith(info.prefix)]

    def summary(self) -> dict:
        deprecated = sum(1 for f in self.functions if f.is_deprecated)
        return {
            "version": self.version.semver,
            "api_level": self.version.api_level,
            "api_compatible": self.version.api_compatible,
            "functions": len(self.functions),
            "deprecated_functions": deprecated,
            "ui_events": len(self.ui_events),
            "ui_options": len(self.ui_options),
            "types": sorted(map(str, self.types)),
            "error_types": sorted(map(str, self.error_types)),
        }


def _require_mapping(value, what: str) -> dict:
    if not isinstance(value, dict):
        raise ModelError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _require_list(value, what: str) -> list:
    if not isinstance(value, list):
        raise ModelError(f"{what} must be a list, got {type(value).__name__}")
    return value


def _parameters(data: dict) -> list[Parameter]:
    return [Parameter.from_pair(p) for p in _require_list(data["parameters"], "parameters")]
