"""
Tests for the command line entry point.
"""

import json
import os

from rent_graph.cli import build_config, main, parse_arguments


def test_parse_defaults():
    args = parse_arguments(["listings.csv"])
    assert args.dataset == "listings.csv"
    assert args.radius_km is None
    assert args.sample_size is None
    assert args.top is None
    assert args.output is None
    assert not args.exclusive


def test_build_config_only_given_options():
    args = parse_arguments(["listings.csv"])
    assert build_config(args) == {
        "steps": [{"name": "load_data", "params": {"dataset_path": "listings.csv"}}]
    }


def test_config_file_values_apply_without_flags(listings_csv, tmp_path, capsys):
    output = tmp_path / "output"
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({
        "steps": [
            {"name": "construct_graph", "params": {"radius_km": 15.0}},
            {"name": "visualize_results", "enabled": False},
            {"name": "export_results", "enabled": True,
             "params": {"output_directory": str(output / "results"), "formats": ["csv"]}},
        ]
    }))

    assert main([str(listings_csv), "--config", str(config_path)]) == 0
    printed = capsys.readouterr().out
    assert "Total Edges in Graph: 3" in printed
    assert os.path.exists(output / "results" / "centrality.csv")
    assert not os.path.exists(output / "centrality.png")


def test_flags_override_config_file(listings_csv, tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({
        "steps": [{"name": "construct_graph", "params": {"radius_km": 15.0}}]
    }))

    code = main([str(listings_csv), "--config", str(config_path), "--radius-km", "10", "--no-plot"])
    assert code == 0
    assert "Total Edges in Graph: 2" in capsys.readouterr().out


def test_build_config_exclusive():
    args = parse_arguments(["listings.csv", "--radius-km", "50", "--exclusive"])
    steps = {step["name"]: step for step in build_config(args)["steps"]}
    assert steps["construct_graph"]["params"] == {"radius_km": 50.0, "inclusive": False}


def test_main_prints_summary(listings_csv, tmp_path, capsys):
    output = tmp_path / "output"
    code = main([str(listings_csv), "--output", str(output), "--top", "2"])

    assert code == 0
    printed = capsys.readouterr().out
    assert "Total Properties Analyzed: 5" in printed
    assert "Total Nodes in Graph: 3" in printed
    assert "Total Edges in Graph: 2" in printed
    assert os.path.exists(output / "centrality.png")


def test_main_no_plot(listings_csv, tmp_path):
    output = tmp_path / "output"
    assert main([str(listings_csv), "--output", str(output), "--no-plot"]) == 0
    assert not os.path.exists(output / "centrality.png")


def test_main_export(listings_csv, tmp_path):
    output = tmp_path / "output"
    assert main([str(listings_csv), "--output", str(output), "--no-plot", "--export"]) == 0
    assert os.path.exists(output / "results" / "centrality.csv")


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.csv"), "--no-plot"]) == 1
