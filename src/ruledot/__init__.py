"""ruledot - render parsed rule expressions as Graphviz DOT graphs."""

__version__ = "0.1.0"

from ruledot.core.rules import Marshaler, load_rule, render_rule

__all__ = ["Marshaler", "load_rule", "render_rule", "__version__"]
