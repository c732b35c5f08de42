"""Figures for chapter 16 (Structs and Functions)."""

from .picture import Arrow, Box, Label, Picture


# ---------------------------------------------------------------------------
# chap16: fig161, object diagram of a MyTime instance
# ---------------------------------------------------------------------------
def fig16_1():
    """The variable `time` referring to a MyTime with hour, minute and second."""
    fields = [("h", "hour", "11", 0.5), ("m", "minute", "59", 0.0), ("s", "second", "30", -0.5)]

    prims = [
        Label(-2.5, 0.0, "time", anchor="east", name="time"),
        Box(width=3.0, height=1.5, name="MyTime"),
        Label(-1.5, 1.0, "MyTime", anchor="west"),
    ]
    for name, field, value, y in fields:
        prims.append(Label(-0.25, y, field, anchor="east", name=name))
        prims.append(Label(0.75, y, value, anchor="west", name=name + "v"))

    prims.append(Arrow("time", "MyTime"))
    prims.extend(Arrow(name, name + "v") for name, *_ in fields)
    return Picture(*prims)
