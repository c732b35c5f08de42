"""Figures for chapter 12 (Tuples).

Each function returns a fresh Picture; register new figures in __main__.py.
"""

from .picture import Arrow, Box, Label, Picture

PHONE = '"08700 100 222"'

# (key name, value name, tuple key) per row of the phone directory, top to bottom
DIRECTORY = [
    ("nc", "c", '("Cleese","John")'),
    ("ng", "g", '("Chapman","Graham")'),
    ("ni", "i", '("Idle","Eric")'),
    ("nt", "t", '("Gilliam","Terry")'),
    ("nj", "j", '("Jones","Terry")'),
    ("np", "p", '("Palin","Michael")'),
]


# ---------------------------------------------------------------------------
# chap12: fig121, a tuple's indices pointing at its elements
# ---------------------------------------------------------------------------
def fig12_1():
    """State diagram of the tuple ("Cleese", "John")."""
    return Picture(
        Box(width=3.5, height=1.0),
        Label(-1.25, 0.25, "1", anchor="east", name="a"),
        Label(-0.25, 0.25, '"Cleese"', anchor="west", name="av"),
        Label(-1.25, -0.25, "2", anchor="east", name="b"),
        Label(-0.25, -0.25, '"John"', anchor="west", name="bv"),
        Arrow("a", "av"),
        Arrow("b", "bv"),
    )


# ---------------------------------------------------------------------------
# chap12: fig122, a dictionary keyed by (last, first) tuples
# ---------------------------------------------------------------------------
def fig12_2():
    """Telephone directory mapping name tuples to numbers."""
    prims = [Box(width=7.5, height=3.0, name="hist")]
    y = 1.25
    for key, value, text in DIRECTORY:
        prims.append(Label(-0.25, y, text, anchor="east", name=key))
        prims.append(Label(0.75, y, PHONE, anchor="west", name=value))
        prims.append(Arrow(key, value))
        y -= 0.5
    return Picture(*prims)
