"""Tests for the command-line entry point."""
import pytest

from serum_ethanol.main import main


def test_main_prints_estimates(capsys):
    assert main(["--volume", "355", "--abv", "0.05", "--weight", "70", "--hours", "2",
                 "--log-level", "WARNING"]) == 0
    out = capsys.readouterr().out
    assert "Ethanol ingested: 14.0 g" in out
    assert "Peak serum ethanol: 33.3 mg/dL" in out
    assert "eBAC after 2h: 1.3 mg/dL" in out
    assert "Clinical effects: No expected clinical effects" in out


def test_main_clamps_display_only(capsys):
    main(["--hours", "5", "--log-level", "WARNING"])
    out = capsys.readouterr().out
    assert "eBAC after 5h: 0.0 mg/dL (unclamped -46.7 mg/dL)" in out


def test_main_profile_and_units(capsys):
    main(["--volume", "2", "--volume-unit", "fl oz", "--abv", "0.4", "--weight", "120",
          "--weight-unit", "lb", "--profile", "female", "--log-level", "WARNING"])
    out = capsys.readouterr().out
    assert "Clinical effects: Impaired judgement; impaired coordination" in out


def test_main_rejects_wrong_unit():
    with pytest.raises(SystemExit) as exc:
        main(["--volume-unit", "kg", "--log-level", "WARNING"])
    assert exc.value.code == 2


def test_main_rejects_weight_in_volume_unit(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--weight-unit", "L", "--log-level", "WARNING"])
    assert exc.value.code == 2
    assert "weight must be a Mass quantity" in capsys.readouterr().err


def test_main_rejects_zero_weight(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--weight", "0", "--log-level", "WARNING"])
    assert exc.value.code == 2
    assert "weight must be > 0" in capsys.readouterr().err


def test_main_saves_graph(tmp_path, capsys):
    out = tmp_path / "ebac.png"
    main(["--graph", str(out), "--log-level", "WARNING"])
    assert out.exists()
    assert "Graph saved" in capsys.readouterr().out
