"""Locale Text — typed lookup over nested locale bundles with a single fallback.

A bundle is the per-language text block of a calculator definition:

    {
        "name": ..., "slug": ..., "subtitle": ...,
        "inputs":  {input_id: {"label": ..., "help_text": ..., "options": {value: label}}},
        "results": {result_id: {"label": ...}},
        "presets": {preset_id: {"label": ...}},
        "values":  {key: text},        # words used inside formatted strings
        "formats": {key: template},    # sentence templates, e.g. "summary"
        "faqs":    [{"question": ..., "answer": ...}],
    }

Invariants:
    - Lookup order is always: active locale → fallback locale (en) → caller default
    - resolve() never returns None or an empty string when a default is given
    - LocaleText never mutates the bundles it wraps

Design Decisions:
    - One lookup object per request instead of ad hoc dict.get chains at each call site
    - Empty strings in a bundle count as missing (untranslated keys are often left blank)
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from calcdeck.core.domain_types import Locale, FALLBACK_LOCALE


def _dig(bundle: Mapping[str, Any] | None, path: tuple[str, ...]) -> Any:
    node: Any = bundle
    for part in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(part)
    return node


def _present(value: Any) -> bool:
    return value is not None and value != ""


def fill_template(template: str, **fields: Any) -> str:
    """Replace {name} placeholders; unknown placeholders are left as-is."""
    text = template
    for name, value in fields.items():
        text = text.replace("{" + name + "}", str(value))
    return text


def merge_bundles(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two bundles; non-empty override values win."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_bundles(current, value)
        elif _present(value):
            merged[key] = value
    return merged


@dataclass(frozen=True)
class LocaleText:
    """Read-only view over one locale bundle plus the fallback bundle."""
    locale: Locale = FALLBACK_LOCALE
    primary: Mapping[str, Any] = field(default_factory=dict)
    fallback: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "LocaleText":
        return cls()

    @classmethod
    def from_bundles(
        cls, bundles: Mapping[str, Mapping[str, Any]], locale: Locale,
    ) -> "LocaleText":
        """Build from a {locale_code: bundle} mapping."""
        fallback = bundles.get(FALLBACK_LOCALE.value, {})
        primary = bundles.get(locale.value, {}) if locale != FALLBACK_LOCALE else fallback
        return cls(locale=locale, primary=primary, fallback=fallback)

    def lookup(self, *path: str) -> Any:
        """Raw lookup along a key path; None when neither bundle has it."""
        value = _dig(self.primary, path)
        if _present(value):
            return value
        value = _dig(self.fallback, path)
        return value if _present(value) else None

    def resolve(self, key: str, default: str) -> str:
        """Word from the `values` table."""
        value = self.lookup("values", key)
        return str(value) if value is not None else default

    def template(self, key: str, default: str) -> str:
        """Sentence template from the `formats` table."""
        value = self.lookup("formats", key)
        return str(value) if value is not None else default

    def input_label(self, input_id: str, default: str) -> str:
        value = self.lookup("inputs", input_id, "label")
        return str(value) if value is not None else default

    def option_label(self, input_id: str, option: str, default: str) -> str:
        value = self.lookup("inputs", input_id, "options", option)
        return str(value) if value is not None else default

    def result_label(self, result_id: str, default: str) -> str:
        value = self.lookup("results", result_id, "label")
        return str(value) if value is not None else default

    def text(self, key: str, default: str = "") -> str:
        """Top-level string such as name, slug or subtitle."""
        value = self.lookup(key)
        return str(value) if value is not None else default

    def merged(self) -> dict[str, Any]:
        """Full bundle with fallback text filling every gap."""
        return merge_bundles(self.fallback, self.primary)
