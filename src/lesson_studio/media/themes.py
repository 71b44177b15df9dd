"""Studio colour presets."""

from types import MappingProxyType

from lesson_studio.models.media import StudioTheme

DEFAULT_THEME_KEY = "casino-gold"

STUDIO_THEMES: MappingProxyType[str, StudioTheme] = MappingProxyType(
    {
        "casino-gold": StudioTheme(
            key="casino-gold",
            background_color="#1a1a2e",
            accent_color="#ffd700",
            brand_color="#ffd700",
            text_color="#ffffff",
            highlight_color="#ffed4e",
        ),
        "luxury-blue": StudioTheme(
            key="luxury-blue",
            background_color="#0f1419",
            accent_color="#1e90ff",
            brand_color="#00d4ff",
            text_color="#e0e0e0",
            highlight_color="#00ffff",
        ),
        "emerald-garden": StudioTheme(
            key="emerald-garden",
            background_color="#0a1f12",
            accent_color="#00d084",
            brand_color="#00d084",
            text_color="#e8f5e9",
            highlight_color="#4ade80",
        ),
        "sunset-orange": StudioTheme(
            key="sunset-orange",
            background_color="#1a0f0a",
            accent_color="#ff6b35",
            brand_color="#ff8c42",
            text_color="#ffe8d6",
            highlight_color="#ffb84d",
        ),
    }
)


def resolve_theme(key: str | None) -> StudioTheme:
    """Look up a preset; unknown or missing keys get the default preset."""
    if key is None:
        return STUDIO_THEMES[DEFAULT_THEME_KEY]
    return STUDIO_THEMES.get(key, STUDIO_THEMES[DEFAULT_THEME_KEY])
