"""todobench - keystroke benchmark harness for to-do list web apps."""

__version__ = "0.1.0"
