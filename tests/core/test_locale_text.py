"""Locale Text — bundle lookup with English fallback.

Tests:
    - Active locale wins, English fills gaps, caller default last
    - Empty strings count as missing
    - merged() deep-merges without mutating the source bundles
    - fill_template leaves unknown placeholders alone
"""

from calcdeck.core.domain_types import Locale
from calcdeck.core.locale_text import LocaleText, fill_template, merge_bundles

BUNDLES = {
    "en": {
        "name": "Calorie Calculator",
        "subtitle": "Daily calories",
        "inputs": {"goal": {"label": "Goal", "options": {"loss": "Lose Weight", "gain": "Gain"}}},
        "values": {"week": "week", "cal": "cal"},
        "formats": {"summary": "Target {dailyCalories} cal"},
    },
    "es": {
        "name": "Calculadora de Calorías",
        "subtitle": "",
        "inputs": {"goal": {"label": "Objetivo", "options": {"loss": "Perder peso"}}},
        "values": {"week": "semana"},
    },
}


def test_active_locale_wins():
    text = LocaleText.from_bundles(BUNDLES, Locale.ES)
    assert text.text("name") == "Calculadora de Calorías"
    assert text.resolve("week", "x") == "semana"
    assert text.option_label("goal", "loss", "x") == "Perder peso"


def test_missing_key_falls_back_to_english():
    text = LocaleText.from_bundles(BUNDLES, Locale.ES)
    assert text.resolve("cal", "x") == "cal"
    assert text.option_label("goal", "gain", "x") == "Gain"
    assert text.template("summary", "x") == "Target {dailyCalories} cal"


def test_empty_string_counts_as_missing():
    text = LocaleText.from_bundles(BUNDLES, Locale.ES)
    assert text.text("subtitle") == "Daily calories"


def test_caller_default_last():
    text = LocaleText.from_bundles(BUNDLES, Locale.ES)
    assert text.resolve("Average", "Average") == "Average"
    assert text.result_label("bmr", "BMR") == "BMR"


def test_locale_without_bundle_reads_english():
    text = LocaleText.from_bundles(BUNDLES, Locale.DE)
    assert text.input_label("goal", "x") == "Goal"


def test_empty_text_returns_defaults():
    assert LocaleText.empty().resolve("cal", "cal") == "cal"


def test_merged_fills_gaps_without_mutating():
    merged = LocaleText.from_bundles(BUNDLES, Locale.ES).merged()
    assert merged["name"] == "Calculadora de Calorías"
    assert merged["subtitle"] == "Daily calories"
    assert merged["inputs"]["goal"]["options"] == {"loss": "Perder peso", "gain": "Gain"}
    assert "cal" not in BUNDLES["es"]["values"]


def test_merge_bundles_override_wins():
    assert merge_bundles({"a": 1, "b": {"c": 2}}, {"b": {"c": 3}}) == {"a": 1, "b": {"c": 3}}


def test_fill_template():
    assert fill_template("{a} and {b}", a=1) == "1 and {b}"
