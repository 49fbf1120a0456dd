import libcst as cst

from cststub.preferences import DEFAULT_HEADER, FormattingPreferences, StubOptions


def test_preferences_from_module() -> None:
    module = cst.parse_module("if x:\r\n\tpass\r\n")
    prefs = FormattingPreferences.from_module(module)
    assert prefs == FormattingPreferences(line_end="\r\n", indent="\t")


def test_overrides_only_replace_given_fields() -> None:
    prefs = FormattingPreferences(line_end="\r\n", indent="  ")
    assert prefs.with_overrides() is prefs
    assert prefs.with_overrides(indent="\t") == FormattingPreferences(line_end="\r\n", indent="\t")


def test_stub_options_apply_on_top_of_source_style() -> None:
    module = cst.parse_module("if x:\r\n  pass\r\n")
    assert StubOptions().preferences_for(module) == FormattingPreferences("\r\n", "  ")
    assert StubOptions(line_end="\n").preferences_for(module) == FormattingPreferences("\n", "  ")
    assert StubOptions().header == DEFAULT_HEADER
