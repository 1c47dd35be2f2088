"""Exceptions for rule AST loading and DOT rendering."""

class RuleError(Exception):
    """Base class for all rule-related errors."""
    pass

class AstLoadError(RuleError):
    """Raised when a serialized AST cannot be turned into rule nodes."""
    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message} at {path}" if path else message)

class DotError(RuleError):
    """Base class for errors raised while rendering a rule to DOT."""
    pass

class DotWriteError(DotError):
    """Raised when the output sink rejects a write."""
    pass

class UnsupportedNodeError(DotError):
    """Raised when the traversal meets an object that is not a rule node."""
    def __init__(self, node: object):
        self.node = node
        super().__init__(f"unsupported node type: {type(node).__name__}")

class EmptyPrimaryError(DotError):
    """Raised when a Primary has none of its alternatives set."""
    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"empty Primary at offset {offset}")
