"""Tests for the llhls-inspect command."""

import json

from llhls.cli import main


def test_summary_output(write_playlist, ll_hls_playlist, capsys):
    exit_code = main([write_playlist(ll_hls_playlist)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "LL-HLS MEDIA PLAYLIST" in out
    assert "fileSequence270.mp4" in out
    assert "LAST-MSN=270" in out


def test_json_output(write_playlist, minimal_playlist, capsys):
    exit_code = main([write_playlist(minimal_playlist), "--json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert data["version"] == 9
    assert data["media_segments"][0]["uri"] == "file0.mp4"
    assert data["media_segments"][0]["partial_segments"] == []


def test_parse_failure_exits_nonzero(write_playlist, capsys):
    exit_code = main([write_playlist("not a playlist\n")])

    assert exit_code == 1
    assert "EXTM3U_TAG_MISSING" in capsys.readouterr().err


def test_config_file_is_applied(write_playlist, ll_hls_playlist, tmp_path, capsys):
    config_path = tmp_path / "parser.yaml"
    config_path.write_text("parser:\n  trailing_segment_policy: error\n")

    exit_code = main([write_playlist(ll_hls_playlist), "--config", str(config_path)])

    assert exit_code == 1
    assert "BUILDER_ERROR" in capsys.readouterr().err


def test_malformed_config_exits_nonzero(write_playlist, minimal_playlist, tmp_path, capsys):
    config_path = tmp_path / "parser.yaml"
    config_path.write_text("parser: [unclosed\n")

    exit_code = main([write_playlist(minimal_playlist), "--config", str(config_path)])

    assert exit_code == 1
    assert "invalid config" in capsys.readouterr().err
