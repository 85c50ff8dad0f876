"""Output generators."""

from ddl_import.generators.diagram import DiagramOptions, convert_to_diagram, determine_cardinality

__all__ = ["DiagramOptions", "convert_to_diagram", "determine_cardinality"]
