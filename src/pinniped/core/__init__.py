"""Document conversion and table navigation for Pinniped."""

from pinniped.core.converter import ConversionError, DocumentConverter, RoundTripReport
from pinniped.core.navigation import CellPosition, Direction, get_cell, navigate

__all__ = [
    "ConversionError",
    "DocumentConverter",
    "RoundTripReport",
    "CellPosition",
    "Direction",
    "get_cell",
    "navigate",
]
