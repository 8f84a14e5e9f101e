"""Built-in palette catalogue."""

from __future__ import annotations

from patternvora.models.layer import Palette

PALETTES: list[Palette] = [
    Palette(name="CNY Classic", bg="#FFF8E7", colors=["#D32F2F", "#C62828", "#FFD700", "#FFA000", "#B71C1C"]),
    Palette(name="CNY Modern", bg="#1A1A2E", colors=["#E94560", "#FF6B6B", "#FFD93D", "#FF8C00", "#C70039"]),
    Palette(name="Xmas Classic", bg="#FDF8F3", colors=["#165B33", "#146B3A", "#BB2528", "#F8B229", "#EA4630"]),
    Palette(name="Nordic Xmas", bg="#0C1929", colors=["#A5D8FF", "#74C0FC", "#FFFFFF", "#FFE066", "#4DABF7"]),
    Palette(name="Party Glam", bg="#1A1A2E", colors=["#FFD700", "#FF6B6B", "#4ECDC4", "#A855F7", "#EC4899"]),
    Palette(name="Midnight Celebration", bg="#0D0D1A", colors=["#FFD700", "#C0C0C0", "#FFFFFF", "#4F46E5", "#7C3AED"]),
    Palette(name="Romantic Pink", bg="#FFF0F5", colors=["#E91E63", "#F8BBD9", "#FF69B4", "#C2185B", "#FCE4EC"]),
    Palette(name="Passion Red", bg="#1A0505", colors=["#E53935", "#FF5252", "#FF8A80", "#D32F2F", "#FFCDD2"]),
    Palette(name="Swiss Style", bg="#f4f4f0", colors=["#e63946", "#1d3557", "#457b9d", "#a8dadc", "#1d3557"]),
    Palette(name="Midnight Neon", bg="#0b1120", colors=["#f72585", "#7209b7", "#3a0ca3", "#4361ee", "#4cc9f0"]),
    Palette(name="Bauhaus", bg="#f0e6d2", colors=["#cc3333", "#3366cc", "#ebbd05", "#1a1a1a"]),
    Palette(name="Arctic Code", bg="#222831", colors=["#00adb5", "#393e46", "#00fff5", "#eeeeee"]),
    Palette(name="French Navy", bg="#f9f7f7", colors=["#112d4e", "#3f72af", "#dbe2ef", "#8da9c4"]),
    Palette(name="Sunset Vibes", bg="#2d1b2e", colors=["#f9ed69", "#f08a5d", "#b83b5e", "#6a2c70"]),
    Palette(name="Earth Tones", bg="#e7e5e4", colors=["#2c3e50", "#8e44ad", "#d35400", "#27ae60", "#c0392b"]),
    Palette(name="Monochrome", bg="#ffffff", colors=["#000000", "#333333", "#666666", "#999999"]),
    Palette(name="Nordic Forest", bg="#dad7cd", colors=["#3a5a40", "#588157", "#a3b18a", "#344e41"]),
    Palette(name="Oceanic", bg="#d4f1f4", colors=["#05445e", "#189ab4", "#75e6da", "#006a71"]),
    Palette(name="Cyberpunk", bg="#050505", colors=["#00f3ff", "#bd00ff", "#ff0055", "#ffe600", "#00ff66"]),
    Palette(name="Retro 80s", bg="#2b1d0e", colors=["#d9775e", "#f2cf5b", "#4b908f", "#2f4858", "#d9a78b"]),
    Palette(name="Vintage Latte", bg="#f4f1de", colors=["#e07a5f", "#3d405b", "#81b29a", "#f2cc8f"]),
]


def get_palette(name: str) -> Palette:
    for palette in PALETTES:
        if palette.name == name:
            return palette
    raise KeyError(f"Unknown palette: {name}")
