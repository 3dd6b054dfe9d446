import pytest

from blog_backend.services.contrast import (
    darken_color, generate_accessible_variants, get_accessible_text_color, get_contrast_ratio,
    get_contrast_safe_pair, lighten_color, meets_wcag_aa, meets_wcag_aaa, validate_theme_accessibility,
)


def test_contrast_ratio():
    assert get_contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21)
    assert get_contrast_ratio("#fff", "#000000") == 0
    assert get_contrast_ratio("not-a-color", "#000000") == 0


def test_wcag_levels():
    assert meets_wcag_aa("#767676", "#FFFFFF")
    assert not meets_wcag_aa("#777777", "#FFFFFF")
    assert meets_wcag_aa("#777777", "#FFFFFF", is_large_text=True)
    assert not meets_wcag_aaa("#767676", "#FFFFFF")


def test_darken_and_lighten():
    assert darken_color("#ffffff", 50) == "#808080"
    assert lighten_color("#000000", 50) == "#808080"
    assert darken_color("invalid", 10) == "invalid"


def test_accessible_text_color():
    assert get_accessible_text_color("#000000") == "#FFFFFF"
    assert get_accessible_text_color("#FFFFFF") == "#000000"


def test_accessible_variants_meet_aa():
    variants = generate_accessible_variants("#7dd3fc")
    assert variants["primary"] == "#7dd3fc"
    assert meets_wcag_aa(variants["primaryAccessible"], "#FFFFFF")


def test_safe_pair():
    pair = get_contrast_safe_pair("#999999", "#FFFFFF")
    assert meets_wcag_aa(pair["foreground"], pair["background"])
    assert get_contrast_safe_pair("#000000", "#FFFFFF") == {"foreground": "#000000", "background": "#FFFFFF"}


def test_theme_validation():
    good = {
        "primary": "#000000", "bgPrimary": "#ffffff", "bgTertiary": "#ffffff",
        "textMuted": "#000000", "textSecondary": "#000000", "bgSecondary": "#ffffff",
    }
    assert validate_theme_accessibility(good) == {"isAccessible": True, "issues": [], "totalIssues": 0}

    result = validate_theme_accessibility({**good, "textMuted": "#eeeeee"})
    assert result["isAccessible"] is False
    assert result["totalIssues"] == 1
    assert "Muted text (#eeeeee)" in result["issues"][0]
