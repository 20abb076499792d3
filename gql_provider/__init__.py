"""Compile a GraphQL service's introspected schema and bind validated queries."""

__version__ = "0.1.0"
