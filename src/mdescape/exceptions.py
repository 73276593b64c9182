"""mdescape exception hierarchy.

Escaping itself never fails: a pattern that does not match simply leaves the
text alone. The errors below cover the inputs around it (malformed trees,
oversized values, bad configuration).

Usage:
    from mdescape.exceptions import InvalidNodeError, MdEscapeError

    try:
        tree = escape_markdown_entities(tree)
    except InvalidNodeError as e:
        print(f"Bad node ({e.node_type}): {e.reason}")
    except MdEscapeError as e:
        print(f"mdescape error: {e}")
"""


class MdEscapeError(Exception):
    """Base exception for all mdescape errors.

    All mdescape-specific exceptions inherit from this class, allowing
    callers to catch them with a single except clause.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Configuration Errors


class ConfigurationError(MdEscapeError):
    """Error in mdescape configuration.

    Raised when config.yaml is not valid YAML or contains values that
    fail validation.
    """

    pass


# Tree Errors


class InvalidNodeError(MdEscapeError):
    """Malformed document tree node.

    Raised when a node has no type, when a text-bearing node carries a
    value that is not a string, or when children is not a sequence.
    """

    def __init__(self, node_type: str | None, reason: str) -> None:
        self.node_type = node_type
        self.reason = reason
        label = f"'{node_type}' node" if node_type else "node"
        super().__init__(f"Invalid {label}: {reason}")


# Resource Errors


class ResourceExhaustedError(MdEscapeError):
    """Value too large to escape.

    Raised before any pattern runs when a text value exceeds the configured
    max_value_length, so adversarial input cannot stall the matcher.
    """

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(
            f"Text value of {length} characters exceeds the limit of {limit}"
        )
