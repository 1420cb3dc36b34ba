"""Tests for the reckon command line front end."""

import io
import json

import pytest

from reckon.cli import build_parser, main
from reckon.cli.errors import (
    CLIConfigError,
    CLIError,
    cli_verbose_enabled,
    format_cli_error,
    wrap_exception,
)
from reckon.errors import InvalidKeywordError, RatesFileError


class TestEvalCommand:
    def test_prints_one_result_per_expression(self, capsys):
        assert main(["eval", "1 plus 2", "5 in binary", "0C in kelvin"]) == 0
        assert capsys.readouterr().out.splitlines() == ["3", "0b101", "273.15 K"]

    def test_failures_print_the_placeholder(self, capsys):
        assert main(["eval", "2 apples", "1+"]) == 0
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["Nope", "Nope"]
        assert captured.err == ""

    def test_strict_reports_errors(self, capsys):
        assert main(["eval", "--strict", "1+1", "2 apples"]) == 1
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["2"]
        assert "2 apples: Invalid keyword: 'apples'" in captured.err
        assert "LEX_INVALID_KEYWORD" in captured.err

    def test_placeholder_from_config_file(self, tmp_path, capsys):
        config = tmp_path / "custom.json"
        config.write_text(json.dumps({"placeholder": "??"}), encoding="utf-8")
        assert main(["--config", str(config), "eval", "1 +"]) == 0
        assert capsys.readouterr().out.strip() == "??"

    def test_rates_file(self, rates_file, capsys):
        assert main(["--rates", str(rates_file), "eval", "1 EUR in USD"]) == 0
        assert capsys.readouterr().out.strip() == "$1.25"

    def test_strict_units_from_config_file(self, tmp_path, capsys):
        config = tmp_path / "custom.json"
        config.write_text(json.dumps({"strict_units": True}), encoding="utf-8")
        assert main(["eval", "5 USD in kelvin"]) == 0
        assert main(["--config", str(config), "eval", "--strict", "5 USD in kelvin"]) == 1
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["5 K"]
        assert "EVAL_INCOMPATIBLE_UNITS" in captured.err

    def test_missing_rates_file(self, tmp_path, capsys):
        assert main(["--rates", str(tmp_path / "absent.json"), "eval", "1"]) == 2
        err = capsys.readouterr().err
        assert "Error [CLI_CONFIG_ERROR]: Could not initialise the interpreter" in err
        assert "Cannot read rates file" in err

    def test_verbose_logs_failures(self, capsys):
        assert main(["--verbose", "eval", "2 apples"]) == 0
        captured = capsys.readouterr()
        assert captured.out.strip() == "Nope"
        assert "Expression evaluation failed" in captured.err


class TestReplCommand:
    def test_reads_until_exit(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1+2\n\nfoo\n  100 F in C  \nexit\n3+3\n"))
        assert main(["repl"]) == 0
        assert capsys.readouterr().out.splitlines() == ["3", "Nope", "37.78 °C"]

    def test_stops_at_end_of_input(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("2^10"))
        assert main(["repl"]) == 0
        assert capsys.readouterr().out.splitlines() == ["1024"]


class TestUnitsCommand:
    def test_lists_families_and_synonyms(self, capsys):
        assert main(["units"]) == 0
        out = capsys.readouterr().out
        assert "temperature" in out
        assert "currency" in out
        assert "c, celsius, °c" in out
        assert "f, fahrenheit, °f" in out

    def test_json_listing(self, capsys):
        assert main(["units", "--json"]) == 0
        listing = json.loads(capsys.readouterr().out)
        assert [entry["family"] for entry in listing] == ["temperature", "currency"]
        assert listing[0]["base"] == "kelvin"
        assert listing[0]["units"]["celsius"] == ["c", "celsius", "°c"]
        assert listing[1]["units"] == {"cad": ["cad"], "usd": ["usd"]}


class TestParser:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 2
        assert "usage: reckon" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("reckon ")

    def test_eval_requires_an_expression(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["eval"])


class TestCLIErrors:
    def test_format_cli_error_with_hint(self):
        message = format_cli_error(CLIConfigError("Bad file", hint="Check the path"))
        assert message == "Error [CLI_CONFIG_ERROR]: Bad file\nHint: Check the path"

    def test_format_library_error(self):
        message = format_cli_error(InvalidKeywordError("apples", column=3))
        assert message.startswith("Error: Invalid keyword: 'apples' (column 3; LEX_INVALID_KEYWORD)")

    def test_format_unexpected_error(self):
        assert format_cli_error(ValueError("boom")) == "Error: ValueError: boom"

    def test_verbose_includes_context(self):
        exc = CLIError("Broken", code="X", context={"path": "/tmp/x"})
        message = format_cli_error(exc, verbose=True)
        assert "Context:\n  path: /tmp/x" in message

    def test_wrap_exception_keeps_details(self):
        original = RatesFileError("Rate fetch failed: invalid_access_key", hint="Re-run the fetch")
        wrapped = wrap_exception(original, message="Could not load rates")
        assert isinstance(wrapped, CLIConfigError)
        assert wrapped.hint == "Re-run the fetch"
        assert wrapped.context["original_type"] == "RatesFileError"
        assert "invalid_access_key" in wrapped.context["original_exception"]

    @pytest.mark.parametrize("value, expected", [("1", True), ("yes", True), ("0", False), ("", False)])
    def test_verbose_from_environment(self, monkeypatch, value, expected):
        monkeypatch.setenv("RECKON_VERBOSE", value)
        assert cli_verbose_enabled() is expected
