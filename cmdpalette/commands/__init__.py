"""Command definitions and the command registry.

This package provides:
- models: Data structures (ArgumentSpec, CommandDefinition)
- registry: Name and alias lookup with registration rules
- parsing: Docstring argument signatures
- discovery: Command extraction from extensions
- tree: Category grouping for listings
"""
