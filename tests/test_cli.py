"""Tests for the command line interface."""

import json
import logging

import pytest

from glyphmind.cli import build_parser, main
from glyphmind.core.analyzer import analyze


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("glyphmind")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestCli:
    def test_prints_signature(self, capsys, emotional_text):
        main([emotional_text, "--seed", "1"])
        out = capsys.readouterr().out
        assert analyze(emotional_text).meaning_signature in out
        assert "Emotional intensity" in out

    def test_reads_file(self, capsys, tmp_path, plain_text):
        path = tmp_path / "note.txt"
        path.write_text(plain_text, encoding="utf-8")
        main(["--file", str(path)])
        assert analyze(plain_text).meaning_signature in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--file", str(tmp_path / "missing.txt")])
        assert exc.value.code == 1

    def test_outputs(self, tmp_path, plain_text):
        record = tmp_path / "record.json"
        still = tmp_path / "still.png"
        main([plain_text, "--json", str(record), "--png", str(still), "--width", "80", "--height", "60"])

        with open(record, encoding="utf-8") as f:
            assert "resonance" in json.load(f)
        assert still.read_bytes()[:4] == b"\x89PNG"

    def test_session_entry(self, tmp_path, plain_text):
        session = tmp_path / "session.json"
        still = tmp_path / "still.png"
        main([plain_text, "--session", str(session), "--input-type", "symbol", "--png", str(still),
              "--width", "40", "--height", "40"])

        with open(session, encoding="utf-8") as f:
            data = json.load(f)
        entry = data["entries"][0]
        assert entry["inputType"] == "symbol"
        assert entry["glyphSnapshot"].startswith("data:image/png;base64,")

    def test_config_file(self, tmp_path, plain_text):
        config = tmp_path / "opts.json"
        config.write_text(json.dumps({"width": 50, "height": 30}), encoding="utf-8")
        still = tmp_path / "still.png"
        main([plain_text, "--config", str(config), "--png", str(still)])

        from PIL import Image
        with Image.open(still) as img:
            assert img.size == (50, 30)

    def test_missing_config(self, tmp_path, plain_text):
        with pytest.raises(SystemExit) as exc:
            main([plain_text, "--config", str(tmp_path / "nope.json")])
        assert exc.value.code == 1

    def test_bad_size(self, plain_text):
        with pytest.raises(SystemExit) as exc:
            main([plain_text, "--width", "0"])
        assert exc.value.code == 1

    def test_parser_defaults(self):
        args = build_parser().parse_args(["hello"])
        assert (args.width, args.height, args.fps) == (400, 400, 60)
        assert args.quality == "medium"
        assert not args.live
