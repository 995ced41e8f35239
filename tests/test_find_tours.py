import argparse
import json

from knightstour import SearchConfig
from knightstour.core import Coord

from scripts.find_tours import (
    decode_tour,
    encode_tour,
    load_config,
    main,
    replay_logged_tours,
    save_log,
    search,
)


def make_args(**overrides):
    values = {
        "config": None,
        "board_size": None,
        "start": None,
        "max_tours": None,
        "max_iterations": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_load_config_reads_yaml_and_applies_overrides(tmp_path):
    cfg_path = tmp_path / "search.yaml"
    cfg_path.write_text("board_size: 6\nstart: [1, 2]\nmax_tours: 4\nmax_iterations: 1000\n")

    config = load_config(make_args(config=str(cfg_path), max_tours=2))

    assert config.board_size == 6
    assert config.start == (1, 2)
    assert config.max_tours == 2
    assert config.max_iterations == 1000


def test_load_config_defaults_without_file(tmp_path):
    config = load_config(make_args(config=str(tmp_path / "missing.yaml")))

    assert config.board_size == 8
    assert config.start == (0, 0)
    assert config.max_tours == 1
    assert config.max_iterations is None


def test_encode_decode_tour():
    tour = [Coord(1, 2), Coord(-2, -1)]
    raw = encode_tour(tour)
    assert raw == [[1, 2], [-2, -1]]
    assert decode_tour(raw) == tour


def test_search_then_replay_log(tmp_path):
    result = search(SearchConfig(max_tours=1), poll_interval=0.01)
    assert result["stats"]["tours_found"] == 1
    assert len(result["tours"]) == 1

    log_path = tmp_path / "logs" / "tours.json"
    log = {
        "metadata": {"board_size": 8, "start": [0, 0]},
        "tours": [encode_tour(tour) for tour in result["tours"]],
    }
    save_log(log, log_path)

    summary = replay_logged_tours(log_path, verbose=False)
    assert summary["tours"] == 1
    assert summary["valid"] == 1
    assert summary["invalid"] == []


def test_replay_reports_invalid_tour(tmp_path):
    log_path = tmp_path / "bad.json"
    log_path.write_text(json.dumps({"metadata": {"board_size": 8}, "tours": [[[1, 2], [2, 1]]]}))

    summary = replay_logged_tours(log_path, verbose=False)

    assert summary["valid"] == 0
    assert summary["invalid"][0]["index"] == 0


def test_main_writes_log_file(tmp_path, capsys):
    log_path = tmp_path / "tours.json"
    main(["--config", str(tmp_path / "none.yaml"), "--max-tours", "1", "--log-file", str(log_path)])

    data = json.loads(log_path.read_text())
    assert data["metadata"]["board_size"] == 8
    assert data["metadata"]["stats"]["stop_reason"] == "max_tours"
    assert len(data["tours"]) == 1
    assert len(data["tours"][0]) == 64
    assert "tours_found" in capsys.readouterr().out
