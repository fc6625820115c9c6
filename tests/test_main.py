"""
Smoke tests for the mapping pipeline command line.
"""

import json

import pytest

from mapping_pipeline.main import main


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        f"canvas: {{w: 4000, h: 300}}\nnew_source: {{w: 1920, h: 108}}\nlogs_dir: {tmp_path / 'logs'}\n",
        encoding="utf-8",
    )
    return path


class TestCommandLine:

    def test_new_validate_autoplace(self, tmp_path, config_path):
        out = tmp_path / "mapping.json"

        assert main(["--config", str(config_path), "new", str(out)]) == 0
        document = json.loads(out.read_text(encoding="utf-8"))
        assert document["canvas"] == {"w": 4000, "h": 300}
        assert document["sources"][0]["zones"] == []

        assert main(["--config", str(config_path), "validate", str(out)]) == 0

        placed = tmp_path / "placed.json"
        assert main(["--config", str(config_path), "autoplace", str(out), "--output", str(placed)]) == 0
        zones = json.loads(placed.read_text(encoding="utf-8"))["sources"][0]["zones"]
        assert zones == [
            {"src": {"x": 0, "y": 0, "w": 1920, "h": 108}, "dst": {"x": 0, "y": 0, "w": 1920, "h": 108}},
        ]

    def test_adjust_and_shuffle(self, tmp_path, config_path):
        out = tmp_path / "mapping.json"
        main(["--config", str(config_path), "new", str(out)])

        assert main([
            "--config", str(config_path), "adjust", str(out), "--source", "0", "--clip", "a.mp4", "--delta", "2",
        ]) == 0
        assert main([
            "--config", str(config_path), "adjust", str(out), "--source", "0", "--clip", "b.mp4", "--delta", "1",
        ]) == 0
        assert main(["--config", str(config_path), "shuffle", str(out), "--source", "0", "--seed", "3"]) == 0

        playlists = json.loads(out.read_text(encoding="utf-8"))["sources"][0]["playlists"]
        assert playlists["default"] == ["a.mp4", "b.mp4", "a.mp4"]

    def test_invalid_document(self, tmp_path, config_path):
        broken = tmp_path / "broken.json"
        broken.write_text('{"canvas": {"w": 1}}', encoding="utf-8")

        assert main(["--config", str(config_path), "validate", str(broken)]) == 1
        assert main(["--config", str(config_path), "validate", str(tmp_path / "absent.json")]) == 1

    def test_invalid_config(self, tmp_path, capsys):
        path = tmp_path / "config.yaml"
        path.write_text("fps: 0\n", encoding="utf-8")

        assert main(["--config", str(path), "new", str(tmp_path / "m.json")]) == 1
        assert "Configuration validation failed" in capsys.readouterr().err
