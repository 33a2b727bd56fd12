"""Terminal client helpers."""
import json

from cli_search import main, parse_line


def test_parse_line_with_types():
    assert parse_line("CPU, Graphic Card | amd 480") == (["amd", "480"], ["CPU", "Graphic Card"])


def test_parse_line_words_only():
    assert parse_line("nvidia  980") == (["nvidia", "980"], [])


def test_single_query_prints_ranked_results(tmp_path, capsys):
    catalog = tmp_path / "products.json"
    catalog.write_text(
        json.dumps(
            [
                {"model": "X1", "type": "GPU", "name": "Nvidia 980"},
                {"model": "X2", "type": "GPU", "name": "AMD 970"},
            ]
        ),
        encoding="utf-8",
    )

    assert main(["--catalog", str(catalog), "--type", "GPU", "980"]) == 0

    out = capsys.readouterr().out
    assert "results: 1" in out
    assert "hits=1 | X1 | GPU | Nvidia 980" in out
    assert "X2" not in out
