"""cmdpalette - an embeddable command palette engine.

Tokenizes command lines typed into an overlay, resolves them against a registry
of commands and pluggable argument types, binds and validates each argument and
invokes the matching handler. Extensions register new commands and argument
types at runtime, and every argument slot gets per-keystroke suggestions.
"""

from .palette import Palette

__all__ = ["Palette"]
