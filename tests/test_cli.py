import json
import re

import pytest
from typer.testing import CliRunner

from missionlab.cli import app
from missionlab.config import config

CLI_SECRET = "cli-admin-key"


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def admin_key(monkeypatch):
    monkeypatch.setattr(config.admin, "ADMIN_KEY", CLI_SECRET)


@pytest.fixture
def optics_pack(tmp_path):
    """Create a content pack JSON file."""
    pack_file = tmp_path / "optics.json"
    pack_file.write_text(
        json.dumps({"optics": {"mission": "See light bend.", "challenge": ["Why?"]}})
    )
    return pack_file


def test_mission_command(runner):
    result = runner.invoke(app, ["mission", "heat engines"])

    assert result.exit_code == 0
    assert "Learning Mission: Thermodynamics" in result.stdout
    assert "Q1." in result.stdout


def test_mission_command_with_pack(runner, optics_pack):
    result = runner.invoke(
        app,
        ["mission", "optics please", "--pack", str(optics_pack), "--key", CLI_SECRET],
    )

    assert result.exit_code == 0
    assert "Learning Mission: Optics" in result.stdout
    assert "See light bend." in result.stdout


def test_pack_with_wrong_key_fails(runner, optics_pack):
    result = runner.invoke(
        app, ["mission", "optics", "--pack", str(optics_pack), "--key", "wrong"]
    )

    assert result.exit_code == 1
    assert "Invalid admin key" in result.stdout


def test_surprise_is_seeded(runner):
    first = runner.invoke(app, ["surprise", "--seed", "3"])
    second = runner.invoke(app, ["surprise", "--seed", "3"])

    assert first.exit_code == 0
    assert first.stdout == second.stdout
    assert "Give me a smart mission on" in first.stdout


def test_topics_lists_presets(runner):
    result = runner.invoke(app, ["topics"])

    assert result.exit_code == 0
    for topic in ("projectile", "electrostatics", "thermodynamics"):
        assert topic in result.stdout


def test_upload_command(runner, optics_pack):
    result = runner.invoke(app, ["upload", str(optics_pack), "--key", CLI_SECRET])

    assert result.exit_code == 0
    assert "Upload successful" in result.stdout
    assert "optics" in result.stdout


def test_upload_schema_violation(runner, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"waves": {"mission": "", "challenge": []}}))

    result = runner.invoke(app, ["upload", str(bad), "--key", CLI_SECRET])

    assert result.exit_code == 1
    assert "Upload failed" in result.stdout
    assert "waves.mission" in result.stdout


def test_simulate_command(runner):
    result = runner.invoke(
        app, ["simulate", "--angle", "45", "--speed", "20", "--gravity", "9.8"]
    )

    assert result.exit_code == 0
    assert "Time of flight: 2.89 s" in result.stdout
    assert "Horizontal range: 40.82 m" in result.stdout


def test_simulate_points_table(runner):
    result = runner.invoke(app, ["simulate", "--points", "5"])

    assert result.exit_code == 0
    assert "Pixel Path" in result.stdout


def test_simulate_samples(runner):
    result = runner.invoke(app, ["simulate", "--samples", "10", "--points", "2"])

    assert result.exit_code == 0
    rows = re.findall(r"^\S\s+(\d+)\s+\S\s+-?[\d.]+", result.stdout, re.M)
    assert rows == ["0", "10"]
    assert config.simulation.SAMPLE_COUNT == 80


def test_simulate_invalid_samples(runner):
    result = runner.invoke(app, ["simulate", "--samples", "0"])

    assert result.exit_code == 1
    assert "SAMPLE_COUNT must be at least 1" in result.stdout


def test_simulate_invalid_gravity(runner):
    result = runner.invoke(app, ["simulate", "--gravity", "0"])

    assert result.exit_code == 1
    assert "Gravity must be positive" in result.stdout


def test_simulate_pdf(runner, tmp_path):
    pdf = tmp_path / "trajectory.pdf"

    result = runner.invoke(app, ["simulate", "--angle", "30", "--pdf", str(pdf)])

    assert result.exit_code == 0
    assert pdf.exists()
