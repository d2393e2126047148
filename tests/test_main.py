import sys

import pytest

import main

YAML = """\
layout:
  max_width: 2

items:
  - id: A
  - id: B
    prerequisites: [A]
  - id: C
    prerequisites: [A, B]
"""


def run_main(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["main.py", *args])
    main.main()


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "graph.yaml"
    path.write_text(YAML)
    return path


class TestMain:
    def test_prints_placements(self, monkeypatch, capsys, graph_file):
        run_main(monkeypatch, str(graph_file))
        out = capsys.readouterr().out
        assert "3 items in 3 layers" in out

    def test_invalid_max_width_override(self, monkeypatch, capsys, graph_file):
        with pytest.raises(SystemExit) as excinfo:
            run_main(monkeypatch, str(graph_file), "--max-width", "0")
        assert excinfo.value.code == 1
        assert "invalid config" in capsys.readouterr().err

    def test_widened_layers_reported(self, monkeypatch, capsys, graph_file):
        run_main(monkeypatch, str(graph_file), "--max-width", "1")
        assert "exceed max width 1" in capsys.readouterr().out

    def test_missing_file(self, monkeypatch, capsys, tmp_path):
        with pytest.raises(SystemExit):
            run_main(monkeypatch, str(tmp_path / "absent.yaml"))
        assert "not found" in capsys.readouterr().err
