import pytest
from PIL import Image

from image_merger import cli


@pytest.fixture
def sources(tmp_path):
    first = tmp_path / "first.png"
    second = tmp_path / "second.png"
    Image.new("RGB", (4, 2), (255, 0, 0)).save(first)
    Image.new("RGB", (3, 5), (0, 255, 0)).save(second)
    return first, second


def test_horizontal_by_default(sources, tmp_path, capsys):
    output = tmp_path / "merged.png"
    code = cli.run([str(sources[0]), str(sources[1]), "-o", str(output)])

    assert code == 0
    with Image.open(output) as merged:
        assert merged.format == "PNG"
        assert merged.size == (7, 5)
        assert merged.getpixel((0, 0)) == (255, 0, 0)
        assert merged.getpixel((0, 4)) == (0, 0, 0)
        assert merged.getpixel((6, 4)) == (0, 255, 0)
    assert "Merged 2 images into 7x5" in capsys.readouterr().out


def test_vertical(sources, tmp_path):
    output = tmp_path / "merged.png"
    assert cli.run([str(sources[0]), str(sources[1]), "-o", str(output), "--vertical"]) == 0
    with Image.open(output) as merged:
        assert merged.size == (4, 7)
        assert merged.getpixel((3, 6)) == (0, 0, 0)


def test_explicit_format_wins_over_suffix(sources, tmp_path):
    output = tmp_path / "merged.png"
    assert cli.run([str(sources[0]), "-o", str(output), "--format", "jpeg"]) == 0
    with Image.open(output) as merged:
        assert merged.format == "JPEG"


def test_unknown_suffix_uses_default_format(sources, tmp_path):
    output = tmp_path / "merged.result"
    assert cli.run([str(sources[0]), "-o", str(output)]) == 0
    assert output.read_bytes().startswith(b"\xff\xd8")


def test_missing_source_fails(tmp_path, capsys):
    code = cli.run([str(tmp_path / "missing.png"), "-o", str(tmp_path / "out.png")])
    assert code == 1
    assert "error:" in capsys.readouterr().err
    assert not (tmp_path / "out.png").exists()


def test_unknown_format_fails(sources, tmp_path, capsys):
    code = cli.run([str(sources[0]), "-o", str(tmp_path / "out.png"), "--format", "nope"])
    assert code == 1
    assert "nope" in capsys.readouterr().err


def test_requires_sources_and_output(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        cli.run(["-o", str(tmp_path / "out.png")])
    assert exc_info.value.code == 2
    with pytest.raises(SystemExit):
        cli.run(["a.png"])


def test_main_exits_with_status(sources, tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda: None)
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(sources[0]), "-o", str(tmp_path / "out.png")])
    assert exc_info.value.code == 0


@pytest.mark.parametrize("value", ["0", "-5", "abc", "nan"])
def test_non_positive_timeout_rejected(sources, tmp_path, value):
    with pytest.raises(SystemExit) as exc_info:
        cli.run([str(sources[0]), "-o", str(tmp_path / "out.png"), "--timeout", value])
    assert exc_info.value.code == 2


def test_bad_timeout_env_fails_cleanly(sources, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("MERGER_HTTP_TIMEOUT", "soon")
    code = cli.run([str(sources[0]), "-o", str(tmp_path / "out.result")])
    assert code == 1
    assert "MERGER_HTTP_TIMEOUT" in capsys.readouterr().err


def test_main_reports_bad_config(sources, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("MERGER_HTTP_TIMEOUT", "-1")
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(sources[0]), "-o", str(tmp_path / "out.png")])
    assert exc_info.value.code == 1
    assert "MERGER_HTTP_TIMEOUT" in capsys.readouterr().err
