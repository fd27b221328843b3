"""Theme colors and color utilities for the UI."""

from typelens.core.alignment import DiffKind


class ThemeColors:
    """Light theme palette."""

    BG = "#f4f8fb"
    CARD_BG = "rgba(255, 255, 255, 0.9)"
    CARD_BORDER = "#d7e3ea"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"
    PRIMARY_DARK = "#005662"

    TEXT_PRIMARY = "#1a3a3a"
    TEXT_SECONDARY = "#4a6572"
    TEXT_MUTED = "#78909c"

    GOOD = "#2e7d32"
    BAD = "#c62828"


class HighlightColors:
    """(foreground, background) per diff kind."""

    CORRECT = ("#15803d", "#dcfce7")
    INCORRECT = ("#b91c1c", "#fecaca")
    MISSING = ("#6b7280", "#fef9c3")
    EXTRA = ("#7e22ce", "#f3e8ff")

    @classmethod
    def for_kind(cls, kind: DiffKind) -> tuple[str, str]:
        return getattr(cls, DiffKind(kind).name)


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a


def accuracy_color(percent: float) -> str:
    """Red below 80%, green at 100%, blended in between."""
    return blend_hex(ThemeColors.BAD, ThemeColors.GOOD, (percent - 80) / 20)
