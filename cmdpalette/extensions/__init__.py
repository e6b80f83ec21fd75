"""Palette extensions: the extension base class and the built-in extension."""
