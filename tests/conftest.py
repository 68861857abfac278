"""Shared test fixtures."""

from io import BytesIO
from xml.etree import ElementTree as ET

import pytest
from PIL import Image

from qr_styling import IdSource, QRMatrix, StylingBuilder

SVG_NS = '{http://www.w3.org/2000/svg}'

EXAMPLE_URL = "https://example.com"


def _cairo_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


def _zbar_available() -> bool:
    try:
        from pyzbar import pyzbar  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


requires_cairo = pytest.mark.skipif(not _cairo_available(), reason="cairo library not available")
requires_zbar = pytest.mark.skipif(not _zbar_available(), reason="zbar library not available")


def parse_svg(svg: str) -> ET.Element:
    return ET.fromstring(svg.encode('utf-8'))


def clip_path_children(root: ET.Element, prefix: str):
    """Children of the first clipPath whose id starts with ``prefix``."""
    for clip in root.iter(f'{SVG_NS}clipPath'):
        if clip.get('id', '').startswith(prefix):
            return list(clip)
    raise AssertionError(f"No clipPath starting with {prefix!r}")


def make_png(width: int, height: int, color=(220, 40, 40, 255)) -> bytes:
    buf = BytesIO()
    Image.new('RGBA', (width, height), color).save(buf, format='PNG')
    return buf.getvalue()


@pytest.fixture
def ids() -> IdSource:
    return IdSource(namespace="")


@pytest.fixture
def builder() -> StylingBuilder:
    return StylingBuilder().data(EXAMPLE_URL)


@pytest.fixture
def options(builder):
    return builder.build_options()


@pytest.fixture
def matrix(options) -> QRMatrix:
    return QRMatrix.from_data(options.data, options.qr_options)


@pytest.fixture
def logo_png() -> bytes:
    return make_png(64, 32)
