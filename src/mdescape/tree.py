"""Document tree model and the escaping transform.

When markdown is typed into a visual editor, entity characters such as '*'
are stored as plain text in the tree rather than as emphasis nodes. Left
as they are, the serializer would write them back as markdown syntax. The
transform walks the tree and escapes text-bearing nodes so the characters
survive as literals.
"""

from __future__ import annotations

import logging
from typing import Any, overload

from pydantic import BaseModel, ConfigDict, ValidationError

from mdescape.config import EscapeConfig
from mdescape.escape import escape_all_chars, escape_common_chars
from mdescape.exceptions import InvalidNodeError, ResourceExhaustedError

logger = logging.getLogger(__name__)


class Node(BaseModel):
    """A markdown syntax tree node (mdast shape).

    Attributes other than type, value and children (position, url, depth...)
    are kept as extra fields and carried through the transform unchanged.
    Values are only checked on text-bearing nodes, when they are escaped.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    type: str
    value: Any = None
    children: list[Node] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain mdast dict, omitting value and children when never given."""
        data: dict[str, Any] = {"type": self.type}
        if "value" in self.model_fields_set:
            data["value"] = self.value
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        data.update(self.model_extra or {})
        return data


def _escape_value(node: Node, is_first_child: bool, config: EscapeConfig) -> str:
    value = node.value
    if not isinstance(value, str):
        raise InvalidNodeError(node.type, f"value must be a string, got {type(value).__name__}")

    limit = config.max_value_length
    if limit is not None and len(value) > limit:
        raise ResourceExhaustedError(len(value), limit)

    # Text opening its parent may also start a heading, list, quote...
    escaped = escape_all_chars(value) if is_first_child else escape_common_chars(value)
    if escaped != value:
        logger.debug("Escaped %s node: %r -> %r", node.type, value, escaped)
    return escaped


def transform(
    node: Node,
    is_first_child: bool = False,
    config: EscapeConfig | None = None,
) -> Node:
    """Return a copy of node with the values of text nodes escaped.

    Children are rewritten first; the first child of every container is
    flagged so its text also gets leading-marker escaping. The input tree is
    never modified.

    Args:
        node: Root of the (sub)tree to rewrite
        is_first_child: Whether node is the first child of its parent
        config: Node type selection and limits. Defaults to EscapeConfig()

    Returns:
        New node with the same shape
    """
    if config is None:
        config = EscapeConfig()

    if node.type in config.passthrough_types:
        return node

    update: dict[str, Any] = {}
    if node.children is not None:
        update["children"] = [
            transform(child, is_first_child=index == 0, config=config)
            for index, child in enumerate(node.children)
        ]

    if node.type in config.text_types:
        update["value"] = _escape_value(node, is_first_child, config)

    return node.model_copy(update=update)


@overload
def escape_markdown_entities(tree: Node, config: EscapeConfig | None = None) -> Node: ...


@overload
def escape_markdown_entities(
    tree: dict[str, Any], config: EscapeConfig | None = None
) -> dict[str, Any]: ...


def escape_markdown_entities(
    tree: Node | dict[str, Any],
    config: EscapeConfig | None = None,
) -> Node | dict[str, Any]:
    """Escape markdown entities throughout a document tree.

    Accepts either a Node or a plain mdast dict (as decoded from JSON) and
    returns the same kind.

    Raises:
        InvalidNodeError: If the tree is malformed
        ResourceExhaustedError: If a value exceeds config.max_value_length

    Example:
        tree = {"type": "root", "children": [{"type": "text", "value": "# *a*"}]}
        escape_markdown_entities(tree)
        # {"type": "root", "children": [{"type": "text", "value": "\\\\# \\\\*a\\\\*"}]}
    """
    if isinstance(tree, Node):
        return transform(tree, config=config)

    if not isinstance(tree, dict):
        raise InvalidNodeError(None, f"expected a mapping, got {type(tree).__name__}")

    try:
        root = Node.model_validate(tree)
    except ValidationError as e:
        raise InvalidNodeError(tree.get("type"), str(e)) from e

    logger.debug("Escaping tree rooted at %s node", root.type)
    return transform(root, config=config).to_dict()
