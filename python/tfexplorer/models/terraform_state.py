"""
tfexplorer/models/terraform_state.py

Pydantic models for the legacy (modules-based) Terraform state format, and
the flattening of a state into a single mapping of dotted path -> FlatEntry.

Output values are carried as a small tagged variant (StringValue, ListValue,
OpaqueValue) so that rendering them for display is a total function.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from tfexplorer.errors import DecodeError


class StringValue(BaseModel):
    """A plain string value."""

    kind: Literal["string"] = "string"
    value: str

    class Config:
        frozen = True


class ListValue(BaseModel):
    """An ordered list of dynamic values."""

    kind: Literal["list"] = "list"
    items: List[DynamicValue] = Field(default_factory=list)

    class Config:
        frozen = True


class OpaqueValue(BaseModel):
    """Anything else (maps, numbers, booleans, null). Rendered structurally."""

    kind: Literal["opaque"] = "opaque"
    value: Any = None

    class Config:
        frozen = True


DynamicValue = Union[StringValue, ListValue, OpaqueValue]
ListValue.model_rebuild()


def to_dynamic(raw: Any) -> DynamicValue:
    """Wrap a decoded JSON value in the matching DynamicValue case."""
    if isinstance(raw, str):
        return StringValue(value=raw)
    if isinstance(raw, list):
        return ListValue(items=[to_dynamic(item) for item in raw])
    return OpaqueValue(value=raw)


def to_display_string(value: DynamicValue) -> str:
    """Render a DynamicValue for the REPL.

    Strings pass through, lists are joined with ',' after rendering each
    element, and anything else falls back to a JSON dump.
    """
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, ListValue):
        return ",".join(to_display_string(item) for item in value.items)
    # TODO: render maps as dotted key/value pairs instead of a JSON dump.
    return json.dumps(value.value, sort_keys=True, default=str)


class Instance(BaseModel):
    """The realized attributes of a resource.

    Attributes:
        id: Provider-assigned identifier.
        attributes: Flat attribute map; nested values arrive already encoded
            as compound keys such as 'tags.%' or 'subnet_ids.0'.
        meta: Provider metadata, carried through untouched.
    """

    id: str = ""
    attributes: Dict[str, str] = Field(default_factory=dict)
    meta: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        coerce_numbers_to_str = True

    @field_validator("attributes", "meta", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class Resource(BaseModel):
    """A single resource in a module, with its primary instance (if any)."""

    type: str = ""
    depends_on: List[str] = Field(default_factory=list)
    primary: Optional[Instance] = None
    provider: str = ""

    @field_validator("depends_on", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Output(BaseModel):
    """A module output.

    Attributes:
        sensitive: Whether Terraform marked the output as sensitive.
        type: Declared type, e.g. 'string', 'list' or 'map'.
        value: The raw decoded value.
    """

    sensitive: bool = False
    type: Union[str, List[Any], None] = None
    value: Any = None

    def value_type(self) -> str:
        """The declared type as a string, whatever shape it was given in."""
        if self.type is None:
            return ""
        if isinstance(self.type, str):
            return self.type
        return json.dumps(self.type)


class Module(BaseModel):
    """A module scope: its path, outputs and resources."""

    path: List[str] = Field(default_factory=list)
    outputs: Dict[str, Output] = Field(default_factory=dict)
    resources: Dict[str, Resource] = Field(default_factory=dict)

    @field_validator("path", "outputs", "resources", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "path" else {}
        return value


class TerraformState(BaseModel):
    """A legacy Terraform state document.

    serial and lineage are carried as-is and never interpreted.
    """

    version: int = 0
    terraform_version: str = ""
    serial: int = 0
    lineage: str = ""
    modules: List[Module] = Field(default_factory=list)

    @field_validator("modules", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class EntryKind(str, Enum):
    OUTPUT = "output"
    ATTRIBUTE = "attribute"


class FlatEntry(BaseModel):
    """One addressable value in a flattened state.

    Attributes:
        kind: Whether this came from an output or a resource attribute.
        value_type: Declared type of the value ('string' for attributes).
        value: The value itself.
    """

    kind: EntryKind
    value_type: str
    value: DynamicValue

    class Config:
        frozen = True


def read_state(raw: Union[bytes, str]) -> TerraformState:
    """Decode a state document from raw JSON.

    Raises:
        DecodeError: If the body is not JSON or not shaped like a state.
    """
    try:
        return TerraformState.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"invalid terraform state: {exc}") from exc


def module_prefix(module: Module) -> str:
    """Dotted key prefix for a module; '' for root, 'module.child.' for a child."""
    return "".join(f"module.{part}." for part in module.path if part != "root")


def flatten(state: TerraformState) -> Dict[str, FlatEntry]:
    """Flatten every output and primary attribute into a dotted-path mapping.

    Keys are '<prefix><output>' and '<prefix><resource>.<attribute>'. A later
    module or resource producing the same key overwrites the earlier one.
    Resources without a primary instance contribute nothing.
    """
    flat: Dict[str, FlatEntry] = {}

    for module in state.modules:
        prefix = module_prefix(module)

        for name, output in module.outputs.items():
            flat[prefix + name] = FlatEntry(
                kind=EntryKind.OUTPUT,
                value_type=output.value_type(),
                value=to_dynamic(output.value),
            )

        for name, resource in module.resources.items():
            if resource.primary is None:
                continue
            path = f"{prefix}{name}."
            for attr_key, attr in resource.primary.attributes.items():
                flat[path + attr_key] = FlatEntry(
                    kind=EntryKind.ATTRIBUTE,
                    value_type="string",
                    value=StringValue(value=attr),
                )

    return flat
