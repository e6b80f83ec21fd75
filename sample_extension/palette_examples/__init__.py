"""Sample cmdpalette extensions."""
