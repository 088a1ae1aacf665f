import pytest
from click.testing import CliRunner

from text_concatenator import __version__
from text_concatenator.cli.main import build_configuration, cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sample(tmp_path):
    """Two small files in a temporary directory."""
    first = tmp_path / "first.txt"
    first.write_text("a\n\nb\n", encoding="utf-8")
    second = tmp_path / "second.txt"
    second.write_text("c\nd\n", encoding="utf-8")
    return first, second


def test_stdin_passthrough(runner):
    result = runner.invoke(cli, [], input="x\ny\n")

    assert result.exit_code == 0
    assert result.stdout == "x\ny\n"


def test_dash_reads_stdin_between_files(runner, sample):
    first, second = sample

    result = runner.invoke(cli, [str(first), "-", str(second)], input="from stdin\n")

    assert result.exit_code == 0
    assert result.stdout == "a\n\nb\nfrom stdin\nc\nd\n"


def test_number_all(runner, sample):
    first, _ = sample

    result = runner.invoke(cli, ["-n", str(first)])

    assert result.exit_code == 0
    assert result.stdout == "     1\ta\n     2\t\n     3\tb\n"


def test_number_nonblank(runner, sample):
    first, _ = sample

    result = runner.invoke(cli, ["--number-nonblank", str(first)])

    assert result.exit_code == 0
    assert result.stdout == "     1\ta\n\n     2\tb\n"


def test_numbering_restarts_for_each_file(runner, sample):
    first, second = sample

    result = runner.invoke(cli, ["--number", str(first), str(second)])

    assert result.stdout.splitlines() == [
        "     1\ta", "     2\t", "     3\tb",
        "     1\tc", "     2\td",
    ]


def test_conflicting_flags_are_a_usage_error(runner, tmp_path):
    missing = tmp_path / "missing.txt"

    result = runner.invoke(cli, ["-n", "-b", str(missing)])

    assert result.exit_code == 2
    assert "mutually exclusive" in result.stderr
    assert "No such file or directory" not in result.stderr
    assert result.stdout == ""


def test_missing_file_is_not_fatal(runner, sample, tmp_path):
    first, second = sample
    missing = tmp_path / "missing.txt"

    result = runner.invoke(cli, [str(first), str(missing), str(second)])

    assert result.exit_code == 0
    assert result.stdout == "a\n\nb\nc\nd\n"
    assert f"{missing}: No such file or directory" in result.stderr


def test_directory_is_reported(runner, tmp_path):
    result = runner.invoke(cli, [str(tmp_path)])

    assert result.exit_code == 0
    assert f"{tmp_path}: Is a directory" in result.stderr


def test_read_error_is_fatal(runner, sample, tmp_path):
    _, second = sample
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"\xff\xfe\n")

    result = runner.invoke(cli, [str(bad), str(second)])

    assert result.exit_code == 1
    assert f"{bad}:" in result.stderr
    assert "c\nd\n" not in result.stdout


def test_encoding_option(runner, tmp_path):
    latin = tmp_path / "latin.txt"
    latin.write_bytes("café\n".encode("latin-1"))

    result = runner.invoke(cli, ["--encoding", "latin-1", str(latin)])

    assert result.exit_code == 0
    assert result.stdout == "café\n"


def test_unknown_encoding_is_a_usage_error(runner, sample):
    first, _ = sample

    result = runner.invoke(cli, ["--encoding", "klingon", str(first)])

    assert result.exit_code == 2
    assert "Unknown encoding" in result.stderr


def test_empty_file_name_is_a_usage_error(runner):
    result = runner.invoke(cli, [""])

    assert result.exit_code == 2
    assert "must not be empty" in result.stderr


def test_config_file_settings(runner, tmp_path):
    latin = tmp_path / "latin.txt"
    latin.write_bytes("né\n".encode("latin-1"))
    config_file = tmp_path / "catr.yml"
    config_file.write_text("settings:\n  encoding: latin-1\n  verbose: true\n", encoding="utf-8")

    result = runner.invoke(cli, ["--config", str(config_file), str(latin)])

    assert result.exit_code == 0
    assert result.stdout == "né\n"
    assert "1 sources, 1 lines written, 0 failed" in result.stderr


def test_invalid_config_file_exits(runner, tmp_path, sample):
    first, _ = sample
    config_file = tmp_path / "catr.yml"
    config_file.write_text("settings:\n  encoding: klingon\n", encoding="utf-8")

    result = runner.invoke(cli, ["-c", str(config_file), str(first)])

    assert result.exit_code == 1
    assert "Unknown encoding: klingon" in result.stderr
    assert result.stdout == ""


def test_verbose_summary(runner, sample, tmp_path):
    first, _ = sample

    result = runner.invoke(cli, ["-v", str(first), str(tmp_path / "gone.txt")])

    assert result.exit_code == 0
    assert "1 sources, 3 lines written, 1 failed" in result.stderr


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert result.stdout == f"catr, version {__version__}\n"


def test_build_configuration_defaults_to_stdin():
    config = build_configuration((), False, True, "utf-8")

    assert config.sources == ["-"]
    assert config.number_nonblank is True


def test_conflicting_flags_checked_before_config_file(runner, tmp_path):
    config_file = tmp_path / "catr.yml"
    config_file.write_text("settings:\n  encoding: klingon\n", encoding="utf-8")

    result = runner.invoke(cli, ["-n", "-b", "-c", str(config_file), "x"])

    assert result.exit_code == 2
    assert "mutually exclusive" in result.stderr
    assert "Configuration Error" not in result.stderr


def test_read_error_keeps_earlier_lines(runner, tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"good\nalso good\n\xff\n")

    result = runner.invoke(cli, [str(bad)])

    assert result.exit_code == 1
    assert result.stdout == "good\nalso good\n"
    assert f"{bad}:" in result.stderr


def test_stdin_read_error_keeps_earlier_lines(runner):
    result = runner.invoke(cli, ["-n"], input=b"ok\n\xff\n")

    assert result.exit_code == 1
    assert result.stdout == "     1\tok\n"
    assert "-: 'utf-8' codec can't decode" in result.stderr


def test_lone_carriage_return_is_one_line(runner, tmp_path):
    path = tmp_path / "cr.txt"
    path.write_bytes(b"a\rb\n")

    result = runner.invoke(cli, ["-n", str(path)])

    assert result.exit_code == 0
    assert result.stdout == "     1\ta\rb\n"
