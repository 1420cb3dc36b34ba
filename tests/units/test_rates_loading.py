"""Tests for loading the currency-rate artifact."""

import json
import logging

import pytest

from reckon.config import ReckonConfig
from reckon.errors import RatesFileError, UnitRegistryError
from reckon.interpreter import Interpreter
from reckon.units import build_registry, get_default_registry, load_rates, parse_rates
from reckon.units.rates import RatesSnapshot, currency_family


class TestParseRates:
    def test_success_payload(self, fixer_payload):
        snapshot = parse_rates(fixer_payload)
        assert isinstance(snapshot, RatesSnapshot)
        assert snapshot.base == "EUR"
        assert snapshot.date == "2019-06-24"
        assert snapshot.rates["USD"] == 1.25
        assert snapshot.rates["EUR"] == 1.0

    def test_codes_are_normalised(self):
        snapshot = parse_rates({"base": "usd", "rates": {"cad": 1.32, "eur": 0.9}})
        assert snapshot.base == "USD"
        assert set(snapshot.rates) == {"USD", "CAD", "EUR"}

    def test_unknown_keys_are_ignored(self, fixer_payload):
        fixer_payload["historical"] = True
        assert parse_rates(fixer_payload).base == "EUR"

    def test_failed_fetch(self):
        payload = {"success": False, "error": {"code": 101, "type": "invalid_access_key"}}
        with pytest.raises(RatesFileError, match="invalid_access_key") as exc_info:
            parse_rates(payload)
        assert exc_info.value.hint

    def test_failed_fetch_without_detail(self):
        with pytest.raises(RatesFileError, match="unknown error"):
            parse_rates({"success": False})

    @pytest.mark.parametrize(
        "payload",
        [
            {"base": "EUR"},
            {"base": "EUR", "rates": {}},
            {"base": "EURO", "rates": {"USD": 1.1}},
            {"base": "EUR", "rates": {"US1": 1.1}},
            {"base": "EUR", "rates": {"USD": -1.1}},
            {"base": "EUR", "rates": {"USD": 0}},
            {"base": "EUR", "rates": {"USD": "lots"}},
            ["EUR", 1.0],
        ],
    )
    def test_invalid_payloads(self, payload):
        with pytest.raises(RatesFileError):
            parse_rates(payload)


class TestLoadRates:
    def test_load_from_file(self, rates_file, caplog):
        with caplog.at_level(logging.INFO, logger="reckon"):
            snapshot = load_rates(rates_file)
        assert snapshot.base == "EUR"
        assert "Loaded 6 currency rates against EUR" in caplog.text

    def test_missing_file(self, tmp_path, caplog):
        with pytest.raises(RatesFileError, match="Cannot read"):
            load_rates(tmp_path / "absent.json")
        assert "Cannot read rates file" in caplog.text

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RatesFileError, match="not valid JSON"):
            load_rates(path)

    def test_failed_fetch_artifact(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text(json.dumps({"success": False, "error": {"type": "rate_limit_reached"}}), encoding="utf-8")
        with pytest.raises(RatesFileError, match="rate_limit_reached"):
            load_rates(path)


class TestLiveRates:
    def test_family_uses_the_snapshot_base(self, fixer_payload):
        family = currency_family(parse_rates(fixer_payload))
        assert family.base == "eur"
        assert {unit.name for unit in family} == {"eur", "usd", "cad", "gbp", "chf", "sek"}

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("1 EUR in USD", "$1.25"),
            ("1 USD in CAD", "$1.2 CAD"),
            ("1 GBP in EUR", "€1.25"),
            ("10 sek", "10 SEK"),
            ("1 EUR + 1 USD", "$2.25"),
        ],
    )
    def test_conversions(self, rates_file, source, expected):
        interpreter = Interpreter(config=ReckonConfig(), registry=build_registry(rates_file))
        assert interpreter.interpret(source) == expected

    def test_live_rates_replace_the_placeholder_family(self, rates_file):
        registry = build_registry(rates_file, strict_units=True)
        assert [family.name for family in registry.families] == ["temperature", "currency"]
        assert registry.family("currency").base == "eur"
        assert "kelvin" in registry
        assert "sek" in registry
        assert registry.strict
        assert "plus" in registry.reserved

    def test_currency_code_colliding_with_an_operator_word(self, tmp_path, fixer_payload):
        fixer_payload["rates"]["XOR"] = 2.0
        path = tmp_path / "rates.json"
        path.write_text(json.dumps(fixer_payload), encoding="utf-8")
        with pytest.raises(UnitRegistryError, match="'xor' .* reserved word"):
            build_registry(path)

    def test_strict_units_from_config(self, monkeypatch):
        monkeypatch.setenv("RECKON_STRICT_UNITS", "true")
        assert get_default_registry().strict

    def test_default_registry_reads_the_configured_file(self, rates_file, monkeypatch):
        monkeypatch.setenv("RECKON_RATES_FILE", str(rates_file))
        registry = get_default_registry()
        assert "sek" in registry
        assert get_default_registry() is registry

    def test_default_registry_without_rates(self):
        registry = get_default_registry()
        assert "cad" in registry
        assert "sek" not in registry
