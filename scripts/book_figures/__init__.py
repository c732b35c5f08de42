"""book_figures: generate the book's state diagrams as SVG and PDF.

Every figure is rendered twice from the same picture: once with the screen
style (SVG for the HTML book) and once with the print style (PDF for the
typeset book).  Both files land in build/figures/ (created automatically).

Usage:
    python scripts/book_figures --chapter chap12    # one chapter
    python scripts/book_figures --all               # all figures
    python scripts/book_figures --list              # list available

Requires: pip install numpy matplotlib
"""

from ._common import (
    PRINT_STYLE,
    SCREEN_STYLE,
    Artifact,
    FigureError,
    InvalidStyleError,
    Style,
    UnresolvedAnchorError,
    WriteError,
    save,
)
from .picture import Arrow, Box, Document, Label, Picture, render, save_pair

__all__ = [
    "Arrow",
    "Artifact",
    "Box",
    "Document",
    "FigureError",
    "InvalidStyleError",
    "Label",
    "PRINT_STYLE",
    "Picture",
    "SCREEN_STYLE",
    "Style",
    "UnresolvedAnchorError",
    "WriteError",
    "render",
    "save",
    "save_pair",
]
