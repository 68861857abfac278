from io import BytesIO

import pytest
from PIL import Image

from qr_styling import ErrorCorrectionLevel
from qr_styling.errors import ImageLoadError
from qr_styling.image_size import (
    calculate_image_size,
    logo_data_uri,
    logo_dimensions,
    max_hidden_axis_dots,
    max_hidden_dots,
    sniff_mime_type,
)

from .conftest import make_png


def test_max_hidden_dots():
    assert max_hidden_dots(0.4, ErrorCorrectionLevel.Q, 25) == 62
    assert max_hidden_dots(0.0, ErrorCorrectionLevel.H, 25) == 0
    assert max_hidden_axis_dots(25) == 11
    assert max_hidden_axis_dots(10) == 0


def test_square_logo():
    result = calculate_image_size(100, 100, 100, 15, 10.0)
    assert (result.hide_x_dots, result.hide_y_dots) == (9, 9)
    assert (result.width, result.height) == (90.0, 90.0)


def test_wide_logo_shrinks_to_budget():
    result = calculate_image_size(64, 32, 62, 11, 12.0)
    assert (result.hide_x_dots, result.hide_y_dots) == (9, 5)


@pytest.mark.parametrize("count", range(21, 62, 4))
@pytest.mark.parametrize("level", list(ErrorCorrectionLevel))
@pytest.mark.parametrize("aspect", [(100, 100), (200, 100), (100, 200), (300, 90)])
@pytest.mark.parametrize("image_size", [0.1, 0.4, 1.0])
def test_hide_area_is_odd_and_bounded(count, level, aspect, image_size):
    budget = max_hidden_dots(image_size, level, count)
    axis = max_hidden_axis_dots(count)
    result = calculate_image_size(aspect[0], aspect[1], budget, axis, 10.0)

    assert result.hide_x_dots % 2 == 1
    assert result.hide_y_dots % 2 == 1
    assert result.hide_x_dots <= axis
    assert result.hide_y_dots <= axis
    assert result.hide_x_dots * result.hide_y_dots <= budget or result.hide_x_dots <= 3


def test_sniff_mime_type():
    assert sniff_mime_type(make_png(2, 2)) == 'image/png'
    assert sniff_mime_type(b'\xff\xd8\xff\xe0rest') == 'image/jpeg'
    assert sniff_mime_type(b'RIFF\x00\x00\x00\x00WEBPVP8 ') == 'image/webp'
    assert sniff_mime_type(b'unknown') == 'image/png'


def test_logo_dimensions(logo_png):
    assert logo_dimensions(logo_png) == (64, 32)
    with pytest.raises(ImageLoadError):
        logo_dimensions(b'definitely not an image')


def test_logo_data_uri(logo_png):
    assert logo_data_uri(logo_png).startswith('data:image/png;base64,iVBOR')

    buf = BytesIO()
    Image.new('RGB', (8, 8), (0, 0, 255)).save(buf, format='JPEG')
    jpeg = buf.getvalue()
    assert logo_data_uri(jpeg).startswith('data:image/jpeg;base64,')
    assert logo_data_uri(jpeg, save_as_blob=False).startswith('data:image/png;base64,')

    with pytest.raises(ImageLoadError):
        logo_data_uri(b'garbage', save_as_blob=False)
