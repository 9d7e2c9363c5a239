"""Tests for stylesheet synthesis."""

from dataclasses import replace

from ats_cv.domain.styles import (
    DEFAULT_TOKENS,
    STYLE_LAYERS,
    StyleTokens,
    print_styles,
    special_section_styles,
    synthesize,
)


def test_synthesize_is_deterministic():
    assert synthesize() == synthesize(StyleTokens())


def test_stylesheet_contains_every_layer_in_order():
    css = synthesize()
    positions = [css.index(layer(DEFAULT_TOKENS).strip().splitlines()[0]) for layer in STYLE_LAYERS]
    assert positions == sorted(positions)


def test_default_tokens_appear_in_stylesheet():
    css = synthesize()

    assert "font-family: 'Arial', 'Helvetica', sans-serif;" in css
    assert "max-width: 210mm;" in css
    assert "color: #2c3e50;" in css
    assert "@media print" in css
    assert "page-break-after: avoid;" in css


def test_special_sections_use_role_classes():
    css = special_section_styles(DEFAULT_TOKENS)

    assert "h2.section-summary + p" in css
    assert "h2.section-highlight + h3" in css
    assert ":contains(" not in synthesize()


def test_normalized_tags_are_styled_like_originals():
    css = synthesize()
    assert "strong, b {" in css
    assert "em, i {" in css


def test_print_layer_overrides_screen_sizes():
    tokens = replace(DEFAULT_TOKENS, font_sizes=replace(DEFAULT_TOKENS.font_sizes, print_body="9pt"))
    assert "font-size: 9pt;" in print_styles(tokens)


def test_token_overrides_change_output():
    tokens = replace(DEFAULT_TOKENS, colors=replace(DEFAULT_TOKENS.colors, primary="#101010"))
    css = synthesize(tokens)

    assert "#101010" in css
    assert "#2c3e50" not in css
    assert css != synthesize()


def test_stylesheet_ends_with_single_newline():
    css = synthesize()
    assert css.endswith("}\n")
    assert not css.startswith("\n")
