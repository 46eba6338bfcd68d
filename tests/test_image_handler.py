import base64
import io

import pytest
from PIL import Image

from image_handler import ImageHandler


def png_bytes(size, mode="RGBA"):
    buffer = io.BytesIO()
    Image.new(mode, size).save(buffer, format="PNG")
    return buffer.getvalue()


def test_data_uri_becomes_rgb_jpeg():
    uri = "data:image/png;base64," + base64.b64encode(png_bytes((20, 10))).decode()

    cover = ImageHandler().load_cover(uri)

    with Image.open(io.BytesIO(cover)) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"
        assert img.size == (20, 10)


def test_wide_images_are_scaled_down():
    uri = "data:image/png;base64," + base64.b64encode(png_bytes((400, 100), mode="RGB")).decode()

    cover = ImageHandler(settings={"max_width": 200}).load_cover(uri)

    with Image.open(io.BytesIO(cover)) as img:
        assert img.size == (200, 50)


def test_relative_path_resolves_against_base_path(tmp_path):
    (tmp_path / "cover.png").write_bytes(png_bytes((8, 8)))

    assert ImageHandler(base_path=str(tmp_path)).load_cover("cover.png") is not None


@pytest.mark.parametrize("reference", [
    "",
    None,
    "https://example.com/cover.jpg",
    "missing/cover.png",
    "data:image/png;base64,bm90IGFuIGltYWdl",
])
def test_unusable_references_resolve_to_none(reference):
    assert ImageHandler().load_cover(reference) is None


def test_small_rgb_image_is_kept_at_its_size(tmp_path):
    path = tmp_path / "cover.jpg"
    Image.new("RGB", (30, 20), (10, 20, 30)).save(path, format="JPEG")

    cover = ImageHandler().load_cover(str(path))

    with Image.open(io.BytesIO(cover)) as img:
        assert img.size == (30, 20)
