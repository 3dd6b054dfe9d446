# 主题颜色可访问性工具（WCAG 对比度）
import math
import re

_HEX_COLOR = re.compile(r'^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$', re.IGNORECASE)

AA_NORMAL, AA_LARGE = 4.5, 3
AAA_NORMAL, AAA_LARGE = 7, 4.5


def _hex_to_rgb(value):
    match = _HEX_COLOR.match(value or '')
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def _rgb_to_hex(rgb):
    return '#' + ''.join(f"{channel:02x}" for channel in rgb)


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def _luminance(rgb):
    def channel(value):
        value = value / 255
        return value / 12.92 if value <= 0.03928 else ((value + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(value) for value in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def get_contrast_ratio(color1, color2):
    """两个十六进制颜色的对比度，颜色无法解析时返回 0"""
    rgb1, rgb2 = _hex_to_rgb(color1), _hex_to_rgb(color2)
    if rgb1 is None or rgb2 is None:
        return 0
    lum1, lum2 = _luminance(rgb1), _luminance(rgb2)
    return (max(lum1, lum2) + 0.05) / (min(lum1, lum2) + 0.05)


def meets_wcag_aa(foreground, background, is_large_text=False):
    return get_contrast_ratio(foreground, background) >= (AA_LARGE if is_large_text else AA_NORMAL)


def meets_wcag_aaa(foreground, background, is_large_text=False):
    return get_contrast_ratio(foreground, background) >= (AAA_LARGE if is_large_text else AAA_NORMAL)


def darken_color(value, percent):
    rgb = _hex_to_rgb(value)
    if rgb is None:
        return value
    factor = 1 - percent / 100
    return _rgb_to_hex(_round_half_up(channel * factor) for channel in rgb)


def lighten_color(value, percent):
    rgb = _hex_to_rgb(value)
    if rgb is None:
        return value
    factor = percent / 100
    return _rgb_to_hex(_round_half_up(channel + (255 - channel) * factor) for channel in rgb)


def get_accessible_text_color(background_color, prefer_dark=True):
    """白字和黑字都满足 AA 时按偏好选择，否则取对比度更高的一个"""
    white = get_contrast_ratio('#FFFFFF', background_color)
    black = get_contrast_ratio('#000000', background_color)
    if white >= AA_NORMAL and black >= AA_NORMAL:
        return '#000000' if prefer_dark else '#FFFFFF'
    return '#FFFFFF' if white > black else '#000000'


def generate_accessible_variants(primary_color):
    """生成主色的浅色 / 深色变体，以及在白色背景上满足 AA 的版本"""
    accessible = primary_color
    for _ in range(10):
        if meets_wcag_aa(accessible, '#FFFFFF'):
            break
        accessible = darken_color(accessible, 10)
    return {
        "primary": primary_color,
        "primaryLight": lighten_color(primary_color, 20),
        "primaryDark": darken_color(primary_color, 20),
        "primaryAccessible": accessible,
        "primaryAccessibleDark": darken_color(accessible, 15),
    }


def get_contrast_safe_pair(foreground, background, is_large_text=False):
    """先尝试加深前景色，不行再逐步提亮背景色"""
    if meets_wcag_aa(foreground, background, is_large_text):
        return {"foreground": foreground, "background": background}

    safe_foreground = foreground
    for _ in range(15):
        if meets_wcag_aa(safe_foreground, background, is_large_text):
            break
        safe_foreground = darken_color(safe_foreground, 8)
    if meets_wcag_aa(safe_foreground, background, is_large_text):
        return {"foreground": safe_foreground, "background": background}

    safe_background = background
    for _ in range(15):
        if meets_wcag_aa(foreground, safe_background, is_large_text):
            break
        safe_background = lighten_color(safe_background, 5)
    return {
        "foreground": foreground if meets_wcag_aa(foreground, safe_background, is_large_text) else safe_foreground,
        "background": safe_background,
    }


def validate_theme_accessibility(colors: dict):
    """检查主题配色（themeSettings.colors）的主要组合是否满足 AA"""
    checks = [
        ("primary", "bgPrimary", "Primary color", "primary background"),
        ("primary", "bgTertiary", "Primary color", "tertiary background"),
        ("textMuted", "bgPrimary", "Muted text", "primary background"),
        ("textSecondary", "bgSecondary", "Secondary text", "secondary background"),
    ]
    issues = []
    for fg_key, bg_key, fg_label, bg_label in checks:
        foreground, background = colors.get(fg_key), colors.get(bg_key)
        if not meets_wcag_aa(foreground, background):
            issues.append(
                f"{fg_label} ({foreground}) has insufficient contrast on {bg_label} ({background})"
            )
    return {"isAccessible": not issues, "issues": issues, "totalIssues": len(issues)}
