"""Tool input schema AST.

Tool inputs are pydantic models. For the LLM-facing function-calling menu
they are first projected onto a small, closed set of schema nodes and then
rendered as JSON schema. Validation always runs against the pydantic model,
never against the rendered schema, so anything the projection does not
understand degrades to a plain string hint instead of failing.
"""

import dataclasses
import types
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo


@dataclass(frozen=True, kw_only=True)
class _Node:
    description: str | None = None
    default: Any = None


@dataclass(frozen=True, kw_only=True)
class ObjectNode(_Node):
    fields: dict[str, "SchemaNode"] = field(default_factory=dict)
    required: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class StringNode(_Node):
    pass


@dataclass(frozen=True, kw_only=True)
class NumberNode(_Node):
    integer: bool = False
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True, kw_only=True)
class BooleanNode(_Node):
    pass


@dataclass(frozen=True, kw_only=True)
class ArrayNode(_Node):
    items: "SchemaNode"


@dataclass(frozen=True, kw_only=True)
class EnumNode(_Node):
    values: tuple[str, ...]


@dataclass(frozen=True, kw_only=True)
class OptionalNode(_Node):
    inner: "SchemaNode"


@dataclass(frozen=True, kw_only=True)
class UnknownNode(_Node):
    """Any shape the projection does not model."""


SchemaNode = Union[
    ObjectNode,
    StringNode,
    NumberNode,
    BooleanNode,
    ArrayNode,
    EnumNode,
    OptionalNode,
    UnknownNode,
]

_JSON_SCALARS = (str, int, float, bool)


# ============================================================================
# MODEL -> AST
# ============================================================================


def schema_from_model(model: type[BaseModel], description: str | None = None) -> ObjectNode:
    """Project a pydantic model onto an ObjectNode.

    A field is required exactly when pydantic requires it; fields with
    defaults are optional.
    """
    fields: dict[str, SchemaNode] = {}
    required: list[str] = []

    for name, info in model.model_fields.items():
        fields[name] = _field_node(info)
        if info.is_required():
            required.append(name)

    return ObjectNode(fields=fields, required=tuple(required), description=description)


def _field_node(info: FieldInfo) -> SchemaNode:
    node = _apply_bounds(_annotation_node(info.annotation), info.metadata)

    default = None
    if not info.is_required():
        default = info.default.value if isinstance(info.default, Enum) else info.default
        if not isinstance(default, _JSON_SCALARS):
            default = None

    return dataclasses.replace(node, description=info.description, default=default)


def _annotation_node(annotation: Any) -> SchemaNode:
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin in (Union, types.UnionType):
        present = [a for a in args if a is not type(None)]
        if len(present) == 1 and len(present) < len(args):
            return OptionalNode(inner=_annotation_node(present[0]))
        return UnknownNode()

    if origin is Literal:
        if args and all(isinstance(v, str) for v in args):
            return EnumNode(values=tuple(args))
        return UnknownNode()

    if origin is list or annotation is list:
        return ArrayNode(items=_annotation_node(args[0]) if args else UnknownNode())

    # bool before int: bool is an int subclass
    if annotation is bool:
        return BooleanNode()
    if annotation is int:
        return NumberNode(integer=True)
    if annotation is float:
        return NumberNode()
    if annotation is str:
        return StringNode()

    if isinstance(annotation, type):
        if issubclass(annotation, BaseModel):
            return schema_from_model(annotation)
        if issubclass(annotation, Enum) and all(isinstance(m.value, str) for m in annotation):
            return EnumNode(values=tuple(m.value for m in annotation))

    return UnknownNode()


def _apply_bounds(node: SchemaNode, metadata: list[Any]) -> SchemaNode:
    if isinstance(node, OptionalNode):
        return dataclasses.replace(node, inner=_apply_bounds(node.inner, metadata))
    if not isinstance(node, NumberNode):
        return node

    minimum, maximum = node.minimum, node.maximum
    for constraint in metadata:
        if getattr(constraint, "ge", None) is not None:
            minimum = constraint.ge
        if getattr(constraint, "le", None) is not None:
            maximum = constraint.le
    return dataclasses.replace(node, minimum=minimum, maximum=maximum)


# ============================================================================
# AST -> JSON SCHEMA
# ============================================================================


def to_json_schema(node: SchemaNode) -> dict[str, Any]:
    """Render a schema node as a JSON-schema fragment."""
    if isinstance(node, ObjectNode):
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {name: to_json_schema(child) for name, child in node.fields.items()},
        }
        if node.required:
            schema["required"] = list(node.required)
    elif isinstance(node, StringNode):
        schema = {"type": "string"}
    elif isinstance(node, NumberNode):
        schema = {"type": "integer" if node.integer else "number"}
        if node.minimum is not None:
            schema["minimum"] = node.minimum
        if node.maximum is not None:
            schema["maximum"] = node.maximum
    elif isinstance(node, BooleanNode):
        schema = {"type": "boolean"}
    elif isinstance(node, ArrayNode):
        schema = {"type": "array", "items": to_json_schema(node.items)}
    elif isinstance(node, EnumNode):
        schema = {"type": "string", "enum": list(node.values)}
    elif isinstance(node, OptionalNode):
        schema = dict(to_json_schema(node.inner))
    else:
        schema = {"type": "string"}

    if node.description:
        schema["description"] = node.description
    if node.default is not None:
        schema["default"] = node.default
    return schema


def model_json_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Shortcut: pydantic model straight to JSON schema."""
    return to_json_schema(schema_from_model(model))
