import cv2
import numpy as np
import pytest

from src.domain import DecodeError, ExtractAreaError, MissingDimensionsError, RawImage
from src.nodes.imaging import ForecastCropNode, ImageSaverNode, crop_image


def _gradient(width=40, height=100):
    rows = np.arange(height, dtype=np.uint8).reshape(height, 1, 1)
    return np.broadcast_to(rows, (height, width, 3)).copy()


def test_crop_removes_margins():
    image = RawImage(_gradient(height=100))

    cropped = crop_image(image, top=10, bottom=25)

    assert cropped.height == 65
    assert cropped.width == 40
    assert cropped.pixels[0, 0, 0] == 10
    assert cropped.pixels[-1, 0, 0] == 74


def test_crop_without_margins_keeps_content():
    image = RawImage(_gradient())

    cropped = crop_image(image, top=0, bottom=0)

    assert np.array_equal(cropped.pixels, image.pixels)
    assert cropped.pixels is not image.pixels


def test_crop_does_not_touch_source():
    source = _gradient()
    image = RawImage(source)

    cropped = crop_image(image, 5, 5)
    cropped.pixels[:] = 0

    assert source[5, 0, 0] == 5


@pytest.mark.parametrize("top, bottom", [(60, 40), (80, 50), (-1, 0)])
def test_invalid_extraction_area_fails(top, bottom):
    with pytest.raises(ExtractAreaError):
        crop_image(RawImage(_gradient(height=100)), top, bottom)


def test_missing_dimensions():
    with pytest.raises(MissingDimensionsError):
        crop_image(RawImage(np.zeros((0, 0, 3), dtype=np.uint8)), 0, 0)


def test_from_bytes_rejects_garbage():
    with pytest.raises(DecodeError):
        RawImage.from_bytes(b"definitely not an image")
    with pytest.raises(DecodeError):
        RawImage.from_bytes(b"")


def test_crop_node_decodes_bytes():
    ok, buffer = cv2.imencode(".png", _gradient(width=30, height=200))
    assert ok
    context = {"image_bytes": buffer.tobytes()}

    context = ForecastCropNode(crop_top=80, crop_bottom=50).run(context)

    assert context["image"].height == 70
    assert context["original_shape"] == (30, 200)
    assert "image_bytes" not in context


def test_saver_node_writes_file(tmp_path):
    output = tmp_path / "images" / "forecast.jpg"
    context = {"image": RawImage(_gradient())}

    context = ImageSaverNode(output_path=output).run(context)

    assert context["image_path"] == output
    assert cv2.imread(str(output)).shape == (100, 40, 3)
