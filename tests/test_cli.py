import os

from book_figures.__main__ import FIGURES, main, match_chapter


def test_match_chapter():
    assert match_chapter("chap12") == "chap12"
    assert match_chapter("chap16-structs-and-functions") == "chap16"
    assert match_chapter("12") == "chap12"
    assert match_chapter("chap12/") == "chap12"
    assert match_chapter("99") is None


def test_list(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "chap12-tuples/" in out
    assert "fig161.svg, fig161.pdf" in out
    assert "3 figures total." in out


def test_unknown_chapter(capsys, tmp_path):
    assert main(["--chapter", "99", "--output-dir", str(tmp_path)]) == 1
    assert "No figures registered" in capsys.readouterr().out
    assert os.listdir(tmp_path) == []


def test_one_chapter(tmp_path, capsys):
    assert main(["--chapter", "16", "--output-dir", str(tmp_path)]) == 0
    assert sorted(os.listdir(tmp_path)) == ["fig161.pdf", "fig161.svg"]
    assert "Generated 1 figure(s)." in capsys.readouterr().out


def test_all(tmp_path):
    assert main(["--all", "--output-dir", str(tmp_path)]) == 0
    expected = sorted(
        figure_id + ext
        for figures in FIGURES.values()
        for figure_id, _ in figures
        for ext in (".pdf", ".svg")
    )
    assert sorted(os.listdir(tmp_path)) == expected
