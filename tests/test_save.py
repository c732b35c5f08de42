import dataclasses
import os

import pytest

from book_figures import (
    PRINT_STYLE,
    SCREEN_STYLE,
    FigureError,
    InvalidStyleError,
    Style,
    WriteError,
    render,
    save,
    save_pair,
)
from book_figures.tuple_figures import fig12_1


def test_styles_are_immutable():
    with pytest.raises(TypeError):
        SCREEN_STYLE.options["font_size"] = 20
    with pytest.raises(dataclasses.FrozenInstanceError):
        SCREEN_STYLE.fmt = "pdf"


def test_replace_returns_new_style():
    bigger = SCREEN_STYLE.replace(font_size=14)
    assert bigger["font_size"] == 14
    assert SCREEN_STYLE["font_size"] == 10
    assert bigger.fmt == SCREEN_STYLE.fmt


def test_missing_option_is_invalid():
    options = {k: v for k, v in SCREEN_STYLE.options.items() if k != "box_fill"}
    style = Style(name="broken", fmt="svg", options=options)
    with pytest.raises(InvalidStyleError) as excinfo:
        render(fig12_1(), style)
    assert excinfo.value.missing == ("box_fill",)
    assert isinstance(excinfo.value, FigureError)


def test_unknown_format_is_invalid():
    style = dataclasses.replace(PRINT_STYLE, fmt="png")
    with pytest.raises(InvalidStyleError, match="png"):
        render(fig12_1(), style)


def test_save_writes_named_artifact(tmp_path, capsys):
    document = render(fig12_1(), SCREEN_STYLE)
    artifact = save(document, "fig121", out_dir=str(tmp_path))
    assert artifact.fmt == "svg"
    assert artifact.path == str(tmp_path / "fig121.svg")
    assert (tmp_path / "fig121.svg").read_bytes() == document.to_bytes()
    assert "fig121.svg" in capsys.readouterr().out


def test_save_overwrites(tmp_path):
    document = render(fig12_1(), PRINT_STYLE)
    save(document, "fig121", out_dir=str(tmp_path))
    first = (tmp_path / "fig121.pdf").read_bytes()
    save(document, "fig121", out_dir=str(tmp_path))
    assert (tmp_path / "fig121.pdf").read_bytes() == first
    assert os.listdir(tmp_path) == ["fig121.pdf"]


def test_save_in_other_format(tmp_path):
    document = render(fig12_1(), SCREEN_STYLE)
    artifact = save(document, "fig121", fmt="pdf", out_dir=str(tmp_path))
    assert artifact.path.endswith(".pdf")
    assert (tmp_path / "fig121.pdf").read_bytes().startswith(b"%PDF")


def test_save_unknown_format(tmp_path):
    document = render(fig12_1(), SCREEN_STYLE)
    with pytest.raises(ValueError):
        save(document, "fig121", fmt="gif", out_dir=str(tmp_path))


def test_save_creates_missing_directory(tmp_path):
    out_dir = tmp_path / "build" / "figures"
    save(render(fig12_1(), SCREEN_STYLE), "fig121", out_dir=str(out_dir))
    assert (out_dir / "fig121.svg").is_file()


def test_unwritable_destination(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    document = render(fig12_1(), SCREEN_STYLE)
    with pytest.raises(WriteError) as excinfo:
        save(document, "fig121", out_dir=str(blocker))
    assert excinfo.value.path == os.path.join(str(blocker), "fig121.svg")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_save_pair_writes_screen_and_print(tmp_path):
    artifacts = save_pair(fig12_1(), "fig121", out_dir=str(tmp_path))
    assert [a.fmt for a in artifacts] == ["svg", "pdf"]
    assert sorted(os.listdir(tmp_path)) == ["fig121.pdf", "fig121.svg"]
    assert (tmp_path / "fig121.svg").read_bytes().startswith(b"<?xml")
    assert (tmp_path / "fig121.pdf").read_bytes().startswith(b"%PDF")


def test_save_pair_is_idempotent(tmp_path):
    save_pair(fig12_1(), "fig121", out_dir=str(tmp_path))
    before = {p.name: p.read_bytes() for p in tmp_path.iterdir()}
    save_pair(fig12_1(), "fig121", out_dir=str(tmp_path))
    after = {p.name: p.read_bytes() for p in tmp_path.iterdir()}
    assert before == after
