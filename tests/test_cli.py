from __future__ import annotations

import json
import logging
import zlib

import pytest
from typer.testing import CliRunner

from karaoke_lyrics.cli import app
from karaoke_lyrics.krc.cipher import encipher

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.delenv("KARAOKE_LYRICS_FORMAT", raising=False)
    monkeypatch.delenv("KARAOKE_LYRICS_DECODE_ENTITIES", raising=False)
    monkeypatch.delenv("KARAOKE_LYRICS_ENCODING", raising=False)


def _krc_file(tmp_path, text: str):
    path = tmp_path / "song.krc.b64"
    path.write_text(encipher(zlib.compress(text.encode("utf-8"))), encoding="utf-8")
    return path


def test_decode_streams(tmp_path):
    path = _krc_file(tmp_path, "[1000,500]<0,500,0>Rock &amp; Roll")

    result = runner.invoke(app, ["decode", str(path), "--stream", "lyric"])
    assert result.exit_code == 0
    assert result.output == "[1000,500]Rock & Roll\n"

    result = runner.invoke(app, ["decode", str(path), "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output)["crlyric"] == "[1000,500](0,500,0)Rock & Roll"


def test_decode_lines(tmp_path):
    path = _krc_file(tmp_path, "[1000,500]<0,200,0>a<200,300,0>b")
    result = runner.invoke(app, ["decode", str(path), "--lines"])
    assert result.exit_code == 0
    assert [c["start_ms"] for c in json.loads(result.output)[0]["chars"]] == [1000, 1200]


def test_decode_malformed_is_no_lyric(tmp_path):
    path = tmp_path / "broken.b64"
    path.write_text("not base64 at all!", encoding="utf-8")
    result = runner.invoke(app, ["decode", str(path)])
    assert result.exit_code == 2
    assert "No lyric" in result.output


def test_decode_unknown_stream(tmp_path):
    path = _krc_file(tmp_path, "[0,1]<0,1,0>x")
    result = runner.invoke(app, ["decode", str(path), "--stream", "karaoke"])
    assert result.exit_code != 0


def test_normalize_formats(tmp_path):
    path = tmp_path / "song.lrc"
    path.write_text("[1000,2000]He(0,500,0)llo(500,500,0)", encoding="utf-8")

    result = runner.invoke(app, ["normalize", str(path)])
    assert result.output == "[00:01.000]He<00:01.500>llo\n"

    result = runner.invoke(app, ["normalize", str(path), "--format", "standard"])
    assert result.output == "[00:01.00]Hello\n"


def test_normalize_uses_saved_format(tmp_path):
    path = tmp_path / "song.lrc"
    path.write_text("[00:01.000]<00:01.000>a", encoding="utf-8")
    out = tmp_path / "out.txt"

    assert runner.invoke(app, ["config", "--format", "char"]).exit_code == 0
    result = runner.invoke(app, ["normalize", str(path), "--out", str(out)])
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "[1000,1000](0,1000,0)a"


def test_config_rejects_unknown_format():
    result = runner.invoke(app, ["config", "--format", "srt"])
    assert result.exit_code != 0


def test_decode_empty_container_warns(tmp_path, caplog):
    path = tmp_path / "empty.b64"
    path.write_text("", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        result = runner.invoke(app, ["decode", str(path)])
    assert result.exit_code == 0
    assert result.output == "\n"
    assert "decoded to an empty lyric" in caplog.text
