"""Core indexing modules for ndview."""

__all__ = [
    "access",
    "axes",
    "backend",
    "config",
    "exceptions",
    "parser",
    "resolver",
    "spec",
    "tensor",
]
