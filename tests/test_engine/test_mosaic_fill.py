"""Tests for the mosaic text / image fill generators."""

from PIL import Image
from shapely.geometry import box

from patternvora.config import settings
from patternvora.engine.generators.mosaic_fill import (
    FILL_STYLE_TYPES,
    generate_mosaic_image_fill,
    generate_mosaic_text_fill,
)
from patternvora.models.layer import TextConfig
from patternvora.utils.raster_lookup import PolygonLookup
from tests.conftest import PALETTE, make_config

W = H = 1000


def _half_red_image():
    image = Image.new("RGBA", (20, 20), (0, 0, 0, 0))
    for x in range(10):
        for y in range(20):
            image.putpixel((x, y), (255, 0, 0, 255))
    return image


def test_text_fill_keeps_points_inside_lookup():
    lookup = PolygonLookup(box(300, 400, 700, 600))
    shapes = generate_mosaic_text_fill(W, H, make_config(), lookup=lookup)
    assert shapes
    assert [s.index for s in shapes] == list(range(len(shapes)))
    for s in shapes:
        assert 300 < s.x < 700 and 400 < s.y < 600
        assert s.type in FILL_STYLE_TYPES["geometric"]
        assert s.color in PALETTE.colors


def test_text_fill_is_seeded():
    lookup = PolygonLookup(box(300, 400, 700, 600))
    config = make_config()
    assert generate_mosaic_text_fill(W, H, config, lookup=lookup) == generate_mosaic_text_fill(
        W, H, config, lookup=lookup
    )


def test_denser_text_fill_has_more_shapes():
    lookup = PolygonLookup(box(0, 0, W, H))
    sparse = generate_mosaic_text_fill(W, H, make_config(), density=0.5, lookup=lookup)
    dense = generate_mosaic_text_fill(W, H, make_config(), density=2.0, lookup=lookup)
    assert len(dense) > len(sparse)


def test_text_fill_with_assets():
    config = make_config(custom_image={"assets": [{"id": "logo"}]})
    shapes = generate_mosaic_text_fill(W, H, config, lookup=PolygonLookup(box(0, 0, W, H)))
    assert shapes
    assert all(s.type == "image" and s.asset_id == "logo" for s in shapes)


def test_text_fill_empty_content():
    config = make_config(text=TextConfig(content=""))
    assert generate_mosaic_text_fill(W, H, config) == []


def test_text_fill_renders_default_font():
    config = make_config(text=TextConfig(content="PATTERN", font_size=200))
    shapes = generate_mosaic_text_fill(W, H, config)
    assert shapes


def test_text_fill_bad_font_is_empty(monkeypatch):
    monkeypatch.setattr(settings, "text_font_path", "/nonexistent/font.ttf")
    assert generate_mosaic_text_fill(W, H, make_config()) == []


def test_image_fill_raw_colors_follow_pixels():
    shapes = generate_mosaic_image_fill(200, 200, make_config(), image=_half_red_image(), color_mode="raw")
    assert shapes
    for s in shapes:
        # Fitted at 80%: image spans 20..180, opaque half ends at x = 100
        assert 20 <= s.x < 100
        assert s.color == "rgb(255,0,0)"


def test_image_fill_palette_colors():
    shapes = generate_mosaic_image_fill(200, 200, make_config(), image=_half_red_image())
    assert shapes
    assert {s.color for s in shapes} <= set(PALETTE.colors)


def test_image_fill_missing_file_is_empty(tmp_path):
    assert generate_mosaic_image_fill(200, 200, make_config(), image=tmp_path / "missing.png") == []


def test_image_fill_empty_image_is_empty():
    assert generate_mosaic_image_fill(200, 200, make_config(), image=Image.new("RGBA", (0, 0))) == []


def test_image_fill_with_polygon_lookup():
    lookup = PolygonLookup(box(50, 50, 150, 150), color="#ff00ff")
    shapes = generate_mosaic_image_fill(200, 200, make_config(), color_mode="raw", lookup=lookup)
    assert shapes
    assert {s.color for s in shapes} == {"#ff00ff"}
