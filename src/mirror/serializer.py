"""JSON export of Mirror programs and derived views.

Nodes are encoded as tagged records, the shape downstream consumers
(prompt builders, completion requests) read:

    {"type": "signature", "name": ..., "parameters": [...], "returnType": ...}
    {"type": "example", "name": ..., "arguments": [...], "result": ...}
    {"type": "expression", "name": ..., "arguments": [...]}

Primitive types become their keyword, scalar literals become JSON
scalars. Output is deterministic so it can be diffed and cached.
"""

from __future__ import annotations

import json
from typing import Any

from mirror.ast_nodes import (
    BooleanLit,
    DictLit,
    DictType,
    Example,
    Expression,
    ListLit,
    ListType,
    NumberLit,
    Parameter,
    PrimitiveType,
    Signature,
    SignatureWithExamples,
    StringLit,
)


def to_dict(node: object) -> Any:
    """Encode a single node, or a sequence of nodes, as plain JSON data."""
    if isinstance(node, (list, tuple)):
        return [to_dict(item) for item in node]

    if isinstance(node, SignatureWithExamples):
        data = _signature_dict(node)
        data["examples"] = [to_dict(ex) for ex in node.examples]
        return data
    if isinstance(node, Signature):
        return _signature_dict(node)
    if isinstance(node, Example):
        return {
            "type": "example",
            "name": node.name,
            "arguments": [to_dict(a) for a in node.arguments],
            "result": to_dict(node.result),
        }
    if isinstance(node, Expression):
        return {
            "type": "expression",
            "name": node.name,
            "arguments": [to_dict(a) for a in node.arguments],
        }
    if isinstance(node, Parameter):
        return {"name": node.name, "type": to_dict(node.type)}

    # Types
    if isinstance(node, PrimitiveType):
        return node.name
    if isinstance(node, ListType):
        return {"type": "list", "inner": to_dict(node.inner)}
    if isinstance(node, DictType):
        return {"type": "dict", "key": to_dict(node.key), "value": to_dict(node.value)}

    # Literals
    if isinstance(node, (BooleanLit, NumberLit, StringLit)):
        return node.value
    if isinstance(node, ListLit):
        return {"type": "list", "items": [to_dict(i) for i in node.items]}
    if isinstance(node, DictLit):
        return {"type": "dict", "key": to_dict(node.key), "value": to_dict(node.value)}

    raise TypeError(f"cannot serialize {type(node).__name__}")


def to_json(node: object, *, indent: int | None = 2) -> str:
    """Serialize a node or sequence of nodes into JSON text."""
    return json.dumps(to_dict(node), indent=indent, ensure_ascii=False)


def _signature_dict(sig: Signature | SignatureWithExamples) -> dict[str, Any]:
    return {
        "type": "signature",
        "name": sig.name,
        "parameters": [to_dict(p) for p in sig.parameters],
        "returnType": to_dict(sig.return_type),
    }
