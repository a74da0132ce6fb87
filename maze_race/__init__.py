"""Classic vs quantum maze search race."""

__version__ = "0.1.0"
