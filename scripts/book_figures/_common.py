"""Shared styles, errors, paths and save helpers for book figure generation."""

import os
from dataclasses import dataclass, field, replace
from types import MappingProxyType

import matplotlib

matplotlib.use("Agg")


# ---------------------------------------------------------------------------
# Paths and settings
# ---------------------------------------------------------------------------

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
BUILD_DIR = os.path.join(REPO_ROOT, "build", "figures")

# Output format tag -> file extension
FORMATS = {
    "svg": ".svg",  # Screen: embedded in the HTML book
    "pdf": ".pdf",  # Print: embedded in the typeset book
}

# Fixed salt so SVG element ids are identical from run to run
SVG_HASH_SALT = "book-figures"

REQUIRED_OPTIONS = (
    "font_family",
    "font_size",
    "text_color",
    "line_color",
    "line_width",
    "box_fill",
    "arrow_style",
    "arrow_gap",
    "margin",
    "fonttype",
)

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class FigureError(Exception):
    """Base class for figure generation failures."""


class UnresolvedAnchorError(FigureError, KeyError):
    """Raised when an arrow names an anchor not defined earlier in the picture."""

    def __init__(self, anchor):
        super().__init__(anchor)
        self.anchor = anchor

    def __str__(self):
        return f"arrow references undefined anchor {self.anchor!r}"


class InvalidStyleError(FigureError, ValueError):
    """Raised when a style configuration cannot be rendered with."""

    def __init__(self, message, missing=()):
        super().__init__(message)
        self.missing = tuple(missing)


class WriteError(FigureError):
    """Raised when an artifact cannot be written to disk."""

    def __init__(self, path, reason):
        super().__init__(f"cannot write {path}: {reason}")
        self.path = path


# ---------------------------------------------------------------------------
# Style configurations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Style:
    """A named, immutable bundle of rendering options."""

    name: str
    fmt: str
    options: "MappingProxyType" = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def __getitem__(self, key):
        return self.options[key]

    def replace(self, **options):
        """Return a copy of this style with some options overridden."""
        merged = dict(self.options)
        merged.update(options)
        return replace(self, options=merged)

    def validate(self):
        if self.fmt not in FORMATS:
            raise InvalidStyleError(f"style {self.name!r}: unknown format {self.fmt!r}")
        missing = [key for key in REQUIRED_OPTIONS if key not in self.options]
        if missing:
            raise InvalidStyleError(
                f"style {self.name!r} is missing option(s): {', '.join(missing)}",
                missing=missing,
            )

    def rc_params(self):
        """matplotlib rcParams applied while rendering and saving."""
        return {
            "font.family": self["font_family"],
            "font.size": self["font_size"],
            "text.color": self["text_color"],
            "svg.fonttype": self["fonttype"] if self.fmt == "svg" else "path",
            "pdf.fonttype": self["fonttype"] if self.fmt == "pdf" else 42,
            "svg.hashsalt": SVG_HASH_SALT,
        }


SCREEN_STYLE = Style(
    name="screen",
    fmt="svg",
    options={
        "font_family": "DejaVu Sans Mono",  # Ships with matplotlib
        "font_size": 10,
        "text_color": "#202020",
        "line_color": "#202020",
        "line_width": 0.8,
        "box_fill": "lightgray",
        "arrow_style": "-|>,head_width=0.2,head_length=0.4",
        "arrow_gap": 2.0,  # Points between a node and an arrow tip
        "margin": 0.05,  # Inches around the tight bounding box
        "fonttype": "none",  # Keep text as <text> so browsers can select it
    },
)

PRINT_STYLE = Style(
    name="print",
    fmt="pdf",
    options={
        "font_family": "DejaVu Sans Mono",
        "font_size": 9,
        "text_color": "black",
        "line_color": "black",
        "line_width": 0.6,
        "box_fill": "#e0e0e0",  # Lighter grey survives offset printing
        "arrow_style": "-|>,head_width=0.2,head_length=0.4",
        "arrow_gap": 2.0,
        "margin": 0.02,
        "fonttype": 42,  # Embed TrueType subsets
    },
)


# ---------------------------------------------------------------------------
# Saving
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Artifact:
    """A figure file written to disk."""

    path: str
    fmt: str


def artifact_path(name, fmt, out_dir=None):
    if fmt not in FORMATS:
        raise ValueError(f"unknown figure format {fmt!r}")
    return os.path.join(out_dir or BUILD_DIR, name + FORMATS[fmt])


def save(document, name, fmt=None, out_dir=None):
    """Write a rendered document to <out_dir>/<name>.<fmt>, replacing any old copy."""
    fmt = fmt or document.style.fmt
    out = artifact_path(name, fmt, out_dir)
    data = document.to_bytes(fmt)

    tmp = out + ".tmp"
    try:
        os.makedirs(os.path.dirname(out), exist_ok=True)
        with open(tmp, "wb") as fh:
            fh.write(data)
        os.replace(tmp, out)
    except OSError as exc:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise WriteError(out, exc.strerror or exc) from exc

    rel = os.path.relpath(out, REPO_ROOT)
    print(f"  {rel}")
    return Artifact(path=out, fmt=fmt)
