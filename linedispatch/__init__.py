"""Hand random lines of a text to a pool of child processes, driven by a command script."""

__version__ = "0.1.0"
__all__ = ["channel", "child", "config", "parent"]