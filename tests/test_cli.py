"""Tests for the Typer command line."""

import json

from typer.testing import CliRunner

from imagedetector import __version__
from imagedetector.cli import _split_patterns, app

runner = CliRunner()


def _tree(root):
    (root / "dir1").mkdir(parents=True)
    (root / "dir1" / "file1.tf").write_text('image = "docker.io/library/ubuntu:latest"')
    (root / "dir1" / "file2.tf").write_text("docker.io/library/ubuntu:latest")
    (root / "docs.md").write_text("Run `test/image2:5678` locally.")
    return root


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_scan_json_to_file(tmp_path):
    root = _tree(tmp_path / "repo")
    out = tmp_path / "images.json"

    result = runner.invoke(app, ["scan", "-d", str(root), "-o", str(out)])

    assert result.exit_code == 0
    assert json.loads(out.read_text()) == [
        "docker.io/library/ubuntu:latest",
        "test/image2:5678",
    ]


def test_scan_exclude_flag(tmp_path):
    root = _tree(tmp_path / "repo")
    out = tmp_path / "images.json"

    result = runner.invoke(
        app, ["scan", "-d", str(root), "-e", "**/*.md,**/nothing", "-o", str(out)]
    )

    assert result.exit_code == 0
    assert json.loads(out.read_text()) == ["docker.io/library/ubuntu:latest"]


def test_scan_empty_directory_is_success(tmp_path):
    root = tmp_path / "empty"
    root.mkdir()
    out = tmp_path / "images.json"

    result = runner.invoke(app, ["scan", "-d", str(root), "-o", str(out)])

    assert result.exit_code == 0
    assert json.loads(out.read_text()) == []


def test_scan_text_to_file(tmp_path):
    root = _tree(tmp_path / "repo")
    out = tmp_path / "images.txt"

    result = runner.invoke(app, ["scan", "-d", str(root), "-f", "text", "-o", str(out)])

    assert result.exit_code == 0
    assert out.read_text().splitlines() == [
        "docker.io/library/ubuntu:latest",
        "test/image2:5678",
    ]


def test_scan_github_output(tmp_path, monkeypatch):
    root = _tree(tmp_path / "repo")
    gh_out = tmp_path / "gh_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(gh_out))

    result = runner.invoke(app, ["scan", "-d", str(root), "-f", "github"])

    assert result.exit_code == 0
    assert gh_out.read_text() == (
        'images=["docker.io/library/ubuntu:latest", "test/image2:5678"]\n'
    )


def test_scan_missing_directory_fails(tmp_path):
    result = runner.invoke(app, ["scan", "-d", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_scan_invalid_pattern_fails(tmp_path):
    root = _tree(tmp_path / "repo")
    result = runner.invoke(app, ["scan", "-d", str(root), "-e", "[broken"])
    assert result.exit_code == 1


def test_scan_unknown_detector_fails(tmp_path):
    root = _tree(tmp_path / "repo")
    result = runner.invoke(app, ["scan", "-d", str(root), "--detector", "helm"])
    assert result.exit_code == 1


def test_scan_reads_config_file(tmp_path):
    root = _tree(tmp_path / "repo")
    out = tmp_path / "images.json"
    cfg = tmp_path / "image-detector.toml"
    cfg.write_text(
        "[scan]\n"
        f'check_directory = "{root.as_posix()}"\n'
        'exclude = ["**/dir1/**"]\n'
        f'output = "{out.as_posix()}"\n'
    )

    result = runner.invoke(app, ["scan", "-c", str(cfg)])

    assert result.exit_code == 0
    assert json.loads(out.read_text()) == ["test/image2:5678"]


def test_scan_missing_config_file_fails(tmp_path):
    result = runner.invoke(app, ["scan", "-c", str(tmp_path / "nope.toml")])
    assert result.exit_code == 1


def test_detectors_command():
    result = runner.invoke(app, ["detectors"])
    assert result.exit_code == 0
    assert "generic" in result.output


def test_config_command(tmp_path):
    cfg = tmp_path / "image-detector.toml"
    cfg.write_text('[scan]\ncheck_directory = "infra"\n')

    result = runner.invoke(app, ["config", "-c", str(cfg)])

    assert result.exit_code == 0
    assert '"check_directory": "infra"' in result.output


def test_split_patterns():
    assert _split_patterns(["**/.git/**, **/vendor/**", "*.md", " "]) == [
        "**/.git/**",
        "**/vendor/**",
        "*.md",
    ]
