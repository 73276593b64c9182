"""mdescape - escape literal markdown characters in document trees.

Rewrites the text nodes of a markdown syntax tree so that characters typed
literally ('*', '_', '#', ...) are not read back as markdown syntax once the
tree is serialized.
"""

from mdescape.config import EscapeConfig, load_config
from mdescape.escape import (
    escape_all_chars,
    escape_common_chars,
    escape_delimiters,
    escape_leading_chars,
)
from mdescape.exceptions import (
    ConfigurationError,
    InvalidNodeError,
    MdEscapeError,
    ResourceExhaustedError,
)
from mdescape.tree import Node, escape_markdown_entities, transform

__version__ = "0.1.0"

__all__ = [
    # Base exception
    "MdEscapeError",
    # Errors
    "ConfigurationError",
    "InvalidNodeError",
    "ResourceExhaustedError",
    # Configuration
    "EscapeConfig",
    "load_config",
    # Escaping
    "escape_all_chars",
    "escape_common_chars",
    "escape_delimiters",
    "escape_leading_chars",
    # Tree
    "Node",
    "escape_markdown_entities",
    "transform",
]
