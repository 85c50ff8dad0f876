"""Layout engine for table positioning."""

from ddl_import.layout.networkx_layout import LayoutOptions, TablePosition, layout_tables

__all__ = ["LayoutOptions", "TablePosition", "layout_tables"]
