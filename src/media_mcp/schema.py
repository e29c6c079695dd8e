"""Parameter schemas and the argument validator.

Tool parameters are described with a small subset of JSON Schema. Each node has
exactly one kind (string, integer, number, boolean, object or array) and a handful
of enforced keywords: ``enum``, ``minimum``/``maximum``, ``minItems``/``maxItems``,
``default``, ``required``, ``properties`` and ``items``. Any other keyword is kept
for advertising to clients but not enforced.
Defaults are checked against their own node when the schema is loaded and are
normalized like caller values when substituted.

Schemas are permissive: keys that an object node does not declare are passed
through unchanged. Validation stops at the first violation, walking properties in
declaration order and array items in index order.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from media_mcp.errors import ErrorKind, SchemaValidationError

SchemaKind = Literal["string", "integer", "number", "boolean", "object", "array"]

_NUMERIC_KINDS = ("integer", "number")


def json_kind(value: object) -> str:
    """Return the JSON kind name of a Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def matches_kind(value: object, kind: str) -> bool:
    """Check whether ``value`` is acceptable for a node of ``kind``."""
    actual = json_kind(value)
    if kind == "integer":
        return actual == "integer" or (
            actual == "number" and float(value).is_integer()  # type: ignore[arg-type]
        )
    if kind == "number":
        return actual in _NUMERIC_KINDS
    return actual == kind


class SchemaNode(BaseModel):
    """One node of a tool parameter schema."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    type: SchemaKind
    description: str | None = None
    enum: list[Any] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    min_items: int | None = Field(default=None, alias="minItems", ge=0)
    max_items: int | None = Field(default=None, alias="maxItems", ge=0)
    default: Any = None
    required: list[str] = Field(default_factory=list)
    properties: dict[str, SchemaNode] = Field(default_factory=dict)
    items: SchemaNode | None = None

    @model_validator(mode="after")
    def _check_keywords(self) -> SchemaNode:
        keywords = self.model_fields_set
        if self.type != "object" and keywords & {"properties", "required"}:
            raise ValueError("'properties' and 'required' only apply to object nodes")
        if self.type != "array" and keywords & {"items", "min_items", "max_items"}:
            raise ValueError("'items', 'minItems' and 'maxItems' only apply to arrays")
        if self.type not in _NUMERIC_KINDS and keywords & {"minimum", "maximum"}:
            raise ValueError("'minimum' and 'maximum' only apply to numeric nodes")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError("'minimum' is greater than 'maximum'")
        if (
            self.min_items is not None
            and self.max_items is not None
            and self.min_items > self.max_items
        ):
            raise ValueError("'minItems' is greater than 'maxItems'")
        for member in self.enum or []:
            if not matches_kind(member, self.type):
                raise ValueError(f"enum member {member!r} is not of kind {self.type}")
        if self.has_default:
            try:
                _walk(self, copy.deepcopy(self.default), "")
            except SchemaValidationError as error:
                raise ValueError(
                    f"default {self.default!r} does not satisfy its schema: "
                    f"{error.message}"
                ) from error
        return self

    @property
    def has_default(self) -> bool:
        """Whether the schema declares a ``default`` (``None`` is not implied)."""
        return "default" in self.model_fields_set

    def to_json_schema(self) -> dict[str, Any]:
        """Return the node as the JSON Schema it was declared with."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


def validate_arguments(schema: SchemaNode, arguments: object) -> Any:
    """Validate ``arguments`` against ``schema`` and apply defaults.

    Args:
        schema: Root schema node, usually an object node.
        arguments: Caller-supplied value.

    Raises:
        SchemaValidationError: On the first constraint violation.

    Returns:
        A new normalized value; the input is never mutated.
    """
    return _walk(schema, arguments, "")


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _label(path: str) -> str:
    return path or "<root>"


def _walk(node: SchemaNode, value: object, path: str) -> Any:
    if not matches_kind(value, node.type):
        actual = json_kind(value)
        raise SchemaValidationError(
            ErrorKind.TYPE_MISMATCH,
            path,
            f"Expected {node.type} at '{_label(path)}', got {actual}",
            expected=node.type,
            actual=actual,
        )
    if node.enum is not None and value not in node.enum:
        raise SchemaValidationError(
            ErrorKind.INVALID_ENUM,
            path,
            f"Value {value!r} at '{_label(path)}' is not one of {node.enum}",
            allowed=list(node.enum),
        )
    if node.type in _NUMERIC_KINDS:
        _check_range(node, value, path)  # type: ignore[arg-type]
    if node.type == "array":
        return _walk_array(node, value, path)  # type: ignore[arg-type]
    if node.type == "object":
        return _walk_object(node, value, path)  # type: ignore[arg-type]
    if node.type == "integer" and isinstance(value, float):
        return int(value)
    return value


def _check_range(node: SchemaNode, value: float, path: str) -> None:
    too_small = node.minimum is not None and value < node.minimum
    too_large = node.maximum is not None and value > node.maximum
    if too_small or too_large:
        raise SchemaValidationError(
            ErrorKind.OUT_OF_RANGE,
            path,
            f"Value {value} at '{_label(path)}' is outside "
            f"[{node.minimum}, {node.maximum}]",
            bounds={"minimum": node.minimum, "maximum": node.maximum},
            actual=value,
        )


def _walk_array(node: SchemaNode, value: list[Any], path: str) -> list[Any]:
    length = len(value)
    too_short = node.min_items is not None and length < node.min_items
    too_long = node.max_items is not None and length > node.max_items
    if too_short or too_long:
        raise SchemaValidationError(
            ErrorKind.INVALID_LENGTH,
            path,
            f"Array at '{_label(path)}' has {length} items, expected "
            f"[{node.min_items}, {node.max_items}]",
            bounds={"minItems": node.min_items, "maxItems": node.max_items},
            actual=length,
        )
    if node.items is None:
        return list(value)
    return [
        _walk(node.items, item, f"{path}[{index}]") for index, item in enumerate(value)
    ]


def _walk_object(
    node: SchemaNode, value: Mapping[str, Any], path: str
) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, child in node.properties.items():
        child_path = _join(path, key)
        if key in value:
            normalized[key] = _walk(child, value[key], child_path)
        elif key in node.required:
            raise _missing(child_path)
        elif child.has_default:
            normalized[key] = _walk(child, copy.deepcopy(child.default), child_path)
    for key in node.required:
        if key not in node.properties and key not in value:
            raise _missing(_join(path, key))
    for key, item in value.items():
        if key not in node.properties:
            normalized[key] = item
    return normalized


def _missing(path: str) -> SchemaValidationError:
    return SchemaValidationError(
        ErrorKind.MISSING_FIELD, path, f"Missing required field '{path}'"
    )
