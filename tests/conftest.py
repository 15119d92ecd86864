"""Shared fixtures for the conversion server tests.

Every test starts from the default configuration so tweaks made with
``Config().set`` in one test never leak into another.
"""

import io

import pytest
from PIL import Image

from convertkit.api.server import create_app
from convertkit.config import Config


@pytest.fixture(autouse=True)
def config():
    Config.load()
    return Config()


@pytest.fixture
async def client(aiohttp_client, config):
    return await aiohttp_client(create_app())


@pytest.fixture
def make_image():
    """Factory producing encoded test images."""

    def _make(size=(100, 100), color=(200, 30, 30), mode="RGB", fmt="PNG") -> bytes:
        img = Image.new(mode, size, color)
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        return buf.getvalue()

    return _make


@pytest.fixture
def make_svg():
    """Factory producing small SVG documents."""

    def _make(body='<path d="M0 0h24v24H0z"/>', view_box="0 0 24 24", extra="") -> bytes:
        vb = f' viewBox="{view_box}"' if view_box else ""
        return f'<svg xmlns="http://www.w3.org/2000/svg"{vb}{extra}>{body}</svg>'.encode()

    return _make
