import json
import re

from click.testing import CliRunner

from insolentbard.cli import cli, _resolve_count

import pytest

INSULT_RE = re.compile(r"^Thou \S+ \S+ \S+!$")


@pytest.fixture
def phrases_file(tmp_path):
    f = tmp_path / "phrases.txt"
    f.write_text("artless\tbeef-witted\tcanker-blossom\n\nbawdy\tbeetle-headed\tclack-dish\n")
    return f


def test_insult_default_prints_one():
    runner = CliRunner()
    result = runner.invoke(cli, ["insult"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 1
    assert INSULT_RE.match(lines[0])


def test_insult_count():
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "--count", "5"])
    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 5


@pytest.mark.parametrize("count", ["0", "501", "many"])
def test_insult_count_out_of_range(count):
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "-c", count])
    assert result.exit_code == 2


def test_insult_single_phrase_file(tmp_path):
    f = tmp_path / "one.txt"
    f.write_text("artless\tbeef-witted\tcanker-blossom\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "-p", str(f), "-c", "3"])
    assert result.exit_code == 0
    assert result.output == "Thou artless beef-witted canker-blossom!\n" * 3


def test_insult_missing_phrases_file(tmp_path):
    """Loader failures exit non-zero with the error message."""
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "-p", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "Cannot read phrases" in result.output


@pytest.mark.parametrize("flags", [[], ["--quiet"], ["--verbose"]])
def test_load_failure_reported_once(tmp_path, flags):
    """A failed load prints a single error line whatever the verbosity."""
    runner = CliRunner()
    result = runner.invoke(cli, flags + ["insult", "-p", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    error_lines = [line for line in result.output.splitlines() if "Cannot read phrases" in line]
    assert len(error_lines) == 1
    assert error_lines[0].startswith("Error: ")


def test_export_failure_reported_once(tmp_path, phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["-q", "insult", "-p", str(phrases_file), "-g", str(tmp_path / "no" / "x.json")])
    assert result.exit_code == 1
    assert result.output.count("Cannot write") == 1
    assert "Error: Cannot write" in result.output


def test_load_failure_still_reaches_log_file(tmp_path):
    """Failures are logged at debug level, so a verbose log file records them."""
    log_path = tmp_path / "run.log"
    runner = CliRunner()
    result = runner.invoke(cli, ["-v", "--log-file", str(log_path), "insult", "-p", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "Loading phrases failed" in log_path.read_text()
    assert "Loading phrases failed" not in result.output


def test_insult_malformed_phrases_file(tmp_path):
    f = tmp_path / "bad.txt"
    f.write_text("a\tb\tc\n\na\tb\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "-p", str(f)])
    assert result.exit_code == 1
    assert "Line 3: expected 3 fields, found 2" in result.output


def test_insult_genfile_cartesian(tmp_path, phrases_file):
    """--genfile writes N**3 insults and reports the N phrases used."""
    out = tmp_path / "all.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "-p", str(phrases_file), "-g", str(out)])
    assert result.exit_code == 0, result.output
    assert f"Generated 2 phrases to {out}" in result.output
    assert len(json.loads(out.read_text())["insults"]) == 8


def test_insult_genfile_verbatim(tmp_path, phrases_file):
    out = tmp_path / "phrases.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "-p", str(phrases_file), "-g", str(out), "-s", "verbatim"])
    assert result.exit_code == 0, result.output
    assert len(json.loads(out.read_text())["phrases"]) == 2


def test_insult_genfile_preset_strategy(tmp_path, phrases_file):
    """The archive preset switches the export to verbatim."""
    out = tmp_path / "phrases.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "--preset", "archive", "-p", str(phrases_file), "-g", str(out)])
    assert result.exit_code == 0, result.output
    assert "phrases" in json.loads(out.read_text())


def test_insult_unknown_strategy(tmp_path, phrases_file):
    """--strategy only accepts registered exporters."""
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "-p", str(phrases_file), "-g", str(tmp_path / "x.json"), "-s", "bogus"])
    assert result.exit_code == 2
    assert "'bogus'" in result.output
    assert not (tmp_path / "x.json").exists()


def test_insult_preset_with_unknown_strategy(tmp_path, phrases_file):
    """A preset naming an unregistered strategy is rejected before any export."""
    from unittest.mock import patch

    out = tmp_path / "x.json"
    runner = CliRunner()
    with patch("insolentbard.config.load_preset", return_value={"strategy": "bogus"}):
        result = runner.invoke(cli, ["insult", "--preset", "mine", "-p", str(phrases_file), "-g", str(out)])
    assert result.exit_code == 2
    assert "cartesian, verbatim" in result.output
    assert not out.exists()


def test_insult_genfile_unwritable(tmp_path, phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "-p", str(phrases_file), "-g", str(tmp_path / "no" / "x.json")])
    assert result.exit_code == 1
    assert "Cannot write" in result.output


def test_insult_preset_count():
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "--preset", "tirade"])
    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 10


def test_insult_preset_count_overridden():
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "--preset", "tirade", "-c", "2"])
    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 2


def test_insult_unknown_preset():
    runner = CliRunner()
    result = runner.invoke(cli, ["insult", "--preset", "nonexistent"])
    assert result.exit_code == 2


def test_resolve_count_valid():
    assert _resolve_count(1) == 1
    assert _resolve_count("500") == 500


def test_resolve_count_invalid():
    from click import BadParameter
    with pytest.raises(BadParameter):
        _resolve_count(0)
    with pytest.raises(BadParameter):
        _resolve_count(501)
    with pytest.raises(BadParameter):
        _resolve_count("lots")
    with pytest.raises(BadParameter):
        _resolve_count(None)


def test_hourly():
    runner = CliRunner()
    first = runner.invoke(cli, ["hourly"])
    assert first.exit_code == 0
    assert INSULT_RE.match(first.output.strip())


def test_mix(phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["mix", "bawdy", "beef-witted", "clack-dish", "-p", str(phrases_file)])
    assert result.exit_code == 0
    assert result.output == "Thou bawdy beef-witted clack-dish!\n"


def test_mix_unknown_word(phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["mix", "polite", "beef-witted", "clack-dish", "-p", str(phrases_file)])
    assert result.exit_code == 1
    assert "'polite' is not a known adjective1" in result.output


def test_search(phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["search", "clack", "-p", str(phrases_file)])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "1: Thou artless beef-witted clack-dish!",
        "3: Thou artless beetle-headed clack-dish!",
        "5: Thou bawdy beef-witted clack-dish!",
        "7: Thou bawdy beetle-headed clack-dish!",
    ]


def test_search_limit(phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["search", "thou", "-l", "3", "-p", str(phrases_file)])
    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 3


def test_search_no_matches(phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["search", "gentle", "-p", str(phrases_file)])
    assert result.exit_code == 0
    assert "No insults match 'gentle'." in result.output


def test_search_blank_query(phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["search", "  ", "-p", str(phrases_file)])
    assert result.exit_code == 2


def test_words(phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["words", "-p", str(phrases_file)])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "adjective1: artless, bawdy",
        "adjective2: beef-witted, beetle-headed",
        "noun: canker-blossom, clack-dish",
    ]


def test_words_single_column(phrases_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["words", "--column", "noun", "-p", str(phrases_file)])
    assert result.exit_code == 0
    assert result.output == "canker-blossom\nclack-dish\n"


def test_presets_lists_bundled():
    runner = CliRunner()
    result = runner.invoke(cli, ["presets"])
    assert result.exit_code == 0
    assert {"archive", "default", "tirade"} <= set(result.output.split())
