"""
Tests for the command-line interface.
"""

import sys

import cli


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["cli.py", *argv])
    return cli.main()


def test_breakpoints_command(monkeypatch, capsys):
    code = run_cli(
        monkeypatch,
        "breakpoints", "--min-width", "100", "--max-width", "250", "--max-images", "3", "--sizes",
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "100, 175, 250" in out
    assert "(max-width: 250px) 250px" in out


def test_breakpoints_command_explicit_widths(monkeypatch, capsys):
    assert run_cli(monkeypatch, "breakpoints", "--widths", "300,100") == 0
    assert "300, 100" in capsys.readouterr().out


def test_breakpoints_command_invalid(monkeypatch, capsys):
    code = run_cli(monkeypatch, "breakpoints", "--min-width", "300", "--max-width", "100", "--max-images", "3")

    assert code == 1
    assert "min_width must be less than max_width" in capsys.readouterr().out


def test_image_command(monkeypatch, capsys):
    monkeypatch.setenv("MEDIA_CLOUD_NAME", "demo")

    code = run_cli(monkeypatch, "image", "sample", "--widths", "100,200", "--sizes", "--secure")

    out = capsys.readouterr().out
    assert code == 0
    assert "src='https://res.cloudinary.com/demo/image/upload/sample'" in out
    assert "c_scale,w_200/sample 200w" in out
    assert "sizes='(max-width: 100px) 100px, (max-width: 200px) 200px'" in out


def test_video_command(monkeypatch, capsys):
    monkeypatch.setenv("MEDIA_CLOUD_NAME", "demo")

    assert run_cli(monkeypatch, "video", "movie.mp4", "--source-types", "mp4", "--controls") == 0
    assert "<video controls" in capsys.readouterr().out


def test_upload_tag_command(monkeypatch, capsys):
    monkeypatch.setenv("MEDIA_CLOUD_NAME", "demo")

    assert run_cli(monkeypatch, "upload-tag", "image_id", "--preset", "preset1") == 0
    assert "data-cloudinary-field='image_id'" in capsys.readouterr().out


def test_missing_configuration(monkeypatch, capsys):
    assert run_cli(monkeypatch, "image", "sample") == 1
    assert "MEDIA_CLOUD_NAME" in capsys.readouterr().out


def test_no_command_prints_help(monkeypatch, capsys):
    assert run_cli(monkeypatch) == 1
    assert "usage" in capsys.readouterr().out


def test_image_command_partial_range_is_rejected(monkeypatch, capsys):
    """Test that a lone range flag still requests a srcset and fails validation."""
    monkeypatch.setenv("MEDIA_CLOUD_NAME", "demo")

    code = run_cli(monkeypatch, "image", "sample", "--min-width", "100")

    out = capsys.readouterr().out
    assert code == 1
    assert "Either valid (min_width, max_width, max_images)" in out
    assert "<img" not in out
