"""Picture primitives and the renderer that turns them into matplotlib figures.

A picture is an ordered tuple of primitives laid out in centimetres:

    Picture(
        Box(width=3.5, height=1.0),
        Label(-1.25, 0.25, "1", anchor="east", name="a"),
        Label(-0.25, 0.25, '"Cleese"', anchor="west", name="av"),
        Arrow("a", "av"),
    )

Named boxes and labels become anchors.  An arrow may only connect anchors
defined before it.  The same picture renders with any Style; only colours,
fonts and line weights change between styles.
"""

import io
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from ._common import PRINT_STYLE, SCREEN_STYLE, Style, UnresolvedAnchorError, save

CM_PER_INCH = 2.54
CM_PER_POINT = CM_PER_INCH / 72.0

# Average advance of a monospace glyph, in ems
GLYPH_ADVANCE = 0.6
LINE_HEIGHT = 1.2

# anchor -> (horizontal alignment, vertical alignment) of the text
ANCHORS = {
    "center": ("center", "center"),
    "east": ("right", "center"),
    "west": ("left", "center"),
    "north": ("center", "top"),
    "south": ("center", "bottom"),
    "north east": ("right", "top"),
    "north west": ("left", "top"),
    "south east": ("right", "bottom"),
    "south west": ("left", "bottom"),
}

# Where the anchor sits on the node, as a fraction of its half extents
_ANCHOR_OFFSETS = {
    "left": 1.0,
    "right": -1.0,
    "bottom": 1.0,
    "top": -1.0,
    "center": 0.0,
}


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Box:
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0
    fill: Optional[str] = None  # None: use the style's box_fill
    name: Optional[str] = None


@dataclass(frozen=True)
class Label:
    x: float
    y: float
    text: str
    anchor: str = "center"
    name: Optional[str] = None

    def __post_init__(self):
        if self.anchor not in ANCHORS:
            raise ValueError(f"unknown label anchor {self.anchor!r}")


@dataclass(frozen=True)
class Arrow:
    start: str
    end: str


Primitive = Union[Box, Label, Arrow]


@dataclass(frozen=True, init=False)
class Picture:
    """An immutable, ordered sequence of primitives."""

    primitives: Tuple[Primitive, ...]

    def __init__(self, *primitives):
        object.__setattr__(self, "primitives", tuple(primitives))

    def __iter__(self):
        return iter(self.primitives)

    def __len__(self):
        return len(self.primitives)


# ---------------------------------------------------------------------------
# Resolved geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Node:
    """The rectangle an anchor occupies, centred at (x, y)."""

    name: str
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self):
        return np.array([self.x, self.y])

    def border_point(self, toward):
        """Point where the ray from the centre toward `toward` leaves the node."""
        d = np.asarray(toward, dtype=float) - self.center
        scales = [
            (self.width / 2) / abs(d[0]) if d[0] else np.inf,
            (self.height / 2) / abs(d[1]) if d[1] else np.inf,
        ]
        t = min(scales)
        if not np.isfinite(t) or t >= 1.0:
            return self.center
        return self.center + t * d


def label_extent(text, font_size):
    """Estimated (width, height) of a one-line label, in centimetres."""
    em = font_size * CM_PER_POINT
    return len(text) * GLYPH_ADVANCE * em, LINE_HEIGHT * em


def label_node(label, font_size):
    width, height = label_extent(label.text, font_size)
    ha, va = ANCHORS[label.anchor]
    return Node(
        name=label.name,
        x=label.x + _ANCHOR_OFFSETS[ha] * width / 2,
        y=label.y + _ANCHOR_OFFSETS[va] * height / 2,
        width=width,
        height=height,
    )


def box_node(box):
    return Node(name=box.name, x=box.x, y=box.y, width=box.width, height=box.height)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@dataclass
class Document:
    """A rendered picture: the figure plus what was drawn on it."""

    figure: "matplotlib.figure.Figure"
    style: Style
    picture: Picture
    nodes: dict
    arrows: list  # (start Node, end Node, Annotation)

    def structure(self):
        """Style-free description of the drawn primitives, in drawing order."""
        items = []
        for prim in self.picture:
            if isinstance(prim, Box):
                items.append(("box", prim.name, prim.x, prim.y, prim.width, prim.height))
            elif isinstance(prim, Label):
                items.append(("label", prim.name, prim.x, prim.y, prim.anchor, prim.text))
        for start, end, _ in self.arrows:
            items.append(("arrow", start.name, end.name))
        return tuple(items)

    def to_bytes(self, fmt=None):
        """Serialize the figure; identical inputs give identical bytes."""
        fmt = fmt or self.style.fmt
        metadata = {"Date": None} if fmt == "svg" else {"CreationDate": None}
        buf = io.BytesIO()
        with matplotlib.rc_context(self.style.rc_params()):
            self.figure.savefig(
                buf,
                format=fmt,
                bbox_inches="tight",
                pad_inches=self.style["margin"],
                transparent=True,
                metadata=metadata,
            )
        return buf.getvalue()


def _extent(nodes):
    corners = np.array(
        [(n.x - n.width / 2, n.y - n.height / 2, n.x + n.width / 2, n.y + n.height / 2) for n in nodes]
    )
    return corners[:, 0].min(), corners[:, 1].min(), corners[:, 2].max(), corners[:, 3].max()


def render(picture, style):
    """Draw `picture` with `style` and return the Document."""
    style.validate()
    if not len(picture):
        raise ValueError("cannot render an empty picture")

    font_size = style["font_size"]
    with matplotlib.rc_context(style.rc_params()):
        fig, ax = plt.subplots()
        fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
        ax.axis("off")

        anchors = {}
        drawn = []
        arrows = []
        for prim in picture:
            if isinstance(prim, Box):
                node = box_node(prim)
                ax.add_patch(
                    Rectangle(
                        (prim.x - prim.width / 2, prim.y - prim.height / 2),
                        prim.width,
                        prim.height,
                        facecolor=prim.fill or style["box_fill"],
                        edgecolor=style["line_color"],
                        linewidth=style["line_width"],
                        zorder=1,
                    )
                )
            elif isinstance(prim, Label):
                node = label_node(prim, font_size)
                ha, va = ANCHORS[prim.anchor]
                ax.text(
                    prim.x,
                    prim.y,
                    prim.text,
                    color=style["text_color"],
                    fontsize=font_size,
                    ha=ha,
                    va=va,
                    zorder=3,
                )
            elif isinstance(prim, Arrow):
                for ref in (prim.start, prim.end):
                    if ref not in anchors:
                        plt.close(fig)
                        raise UnresolvedAnchorError(ref)
                start, end = anchors[prim.start], anchors[prim.end]
                tail = start.border_point(end.center)
                head = end.border_point(start.center)
                annotation = ax.annotate(
                    "",
                    xy=tuple(head),
                    xytext=tuple(tail),
                    arrowprops={
                        "arrowstyle": style["arrow_style"],
                        "color": style["line_color"],
                        "lw": style["line_width"],
                        "shrinkA": style["arrow_gap"],
                        "shrinkB": style["arrow_gap"],
                    },
                    zorder=2,
                )
                arrows.append((start, end, annotation))
                continue
            else:
                plt.close(fig)
                raise TypeError(f"not a picture primitive: {prim!r}")

            drawn.append(node)
            if prim.name is not None:
                anchors[prim.name] = node

        x0, y0, x1, y1 = _extent(drawn)
        ax.set_xlim(x0, x1)
        ax.set_ylim(y0, y1)
        ax.set_aspect("equal")
        fig.set_size_inches((x1 - x0) / CM_PER_INCH, (y1 - y0) / CM_PER_INCH)

    return Document(figure=fig, style=style, picture=picture, nodes=anchors, arrows=arrows)


def save_pair(picture, name, out_dir=None):
    """Render a picture with the screen and print styles and save both.

    Each pass gets its own Style value; nothing is mutated between them.
    """
    artifacts = []
    for style in (SCREEN_STYLE, PRINT_STYLE):
        document = render(picture, style)
        try:
            artifacts.append(save(document, name, out_dir=out_dir))
        finally:
            plt.close(document.figure)
    return artifacts
