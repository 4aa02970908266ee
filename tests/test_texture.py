import pytest

from solitable import texture
from solitable.texture import (
    Bitmap,
    OpenglTextureInfo,
    TextureFormat,
    bytes_per_texel,
    format_for_channels,
    ogl_format,
)


@pytest.mark.parametrize(
    "fmt, expected",
    [
        (TextureFormat.R8, 1),
        (TextureFormat.RG88, 2),
        (TextureFormat.RGB888, 3),
        (TextureFormat.ARGB8888, 4),
        (TextureFormat.DEPTH32F, 4),
    ],
)
def test_bytes_per_texel(fmt, expected):
    assert bytes_per_texel(fmt) == expected


@pytest.mark.parametrize("fmt", [TextureFormat.UNINITIALIZE, TextureFormat.DXT1, TextureFormat.ARGB_HALF])
def test_bytes_per_texel_unsupported(fmt):
    with pytest.raises(ValueError):
        bytes_per_texel(fmt)


@pytest.mark.parametrize("channels", [1, 2, 3, 4])
def test_format_for_channels_round_trip(channels):
    assert bytes_per_texel(format_for_channels(channels)) == channels


@pytest.mark.parametrize("channels", [0, 5, -1])
def test_format_for_channels_invalid(channels):
    with pytest.raises(ValueError):
        format_for_channels(channels)


def test_format_for_channels_values_follow_source():
    assert format_for_channels(4) is TextureFormat.ARGB8888
    assert format_for_channels(4) == 1
    assert format_for_channels(3) == 2


def test_bitmap_allocate():
    bitmap = Bitmap.allocate(7, 5, TextureFormat.RGB888)
    assert (bitmap.width, bitmap.height) == (7, 5)
    assert len(bitmap.data) == 7 * 5 * bytes_per_texel(TextureFormat.RGB888)
    assert not any(bitmap.data)
    assert bitmap.format is TextureFormat.RGB888
    assert bitmap.num_mipmap_levels == 1


def test_bitmap_allocate_compressed_rejected():
    with pytest.raises(ValueError):
        Bitmap.allocate(4, 4, TextureFormat.DXT5)


def test_ogl_format_rgb_alignment_and_srgb():
    linear = ogl_format(TextureFormat.RGB888, False)
    srgb = ogl_format(TextureFormat.RGB888, True)
    assert linear.dest_format == texture.GL_RGB8
    assert srgb.dest_format == texture.GL_SRGB8
    assert linear.src_format == srgb.src_format == texture.GL_RGB
    assert linear.alignment == 1


def test_ogl_format_rgba():
    info = ogl_format(TextureFormat.ARGB8888, False)
    assert info == OpenglTextureInfo(texture.GL_RGBA8, texture.GL_RGBA, texture.GL_UNSIGNED_BYTE)
    assert info.alignment == 4
    assert ogl_format(TextureFormat.ARGB8888, True).dest_format == texture.GL_SRGB8_ALPHA8


@pytest.mark.parametrize(
    "fmt, block",
    [(TextureFormat.DXT1, 8), (TextureFormat.DXT3, 16), (TextureFormat.DXT5, 16)],
)
def test_ogl_format_compressed(fmt, block):
    info = ogl_format(fmt, False)
    assert info.compressed is True
    assert info.block_size == block
    assert info.src_format == texture.GL_INVALID_ENUM
    assert ogl_format(fmt, True).dest_format != info.dest_format


@pytest.mark.parametrize(
    "fmt",
    [TextureFormat.R8, TextureFormat.RG88, TextureFormat.ARGB_HALF, TextureFormat.DEPTH32F],
)
def test_ogl_format_linear_only(fmt):
    assert ogl_format(fmt, False).compressed is False
    with pytest.raises(ValueError):
        ogl_format(fmt, True)


def test_ogl_format_depth_and_uninitialized():
    info = ogl_format(TextureFormat.DEPTH32F)
    assert info.dest_format == texture.GL_DEPTH_COMPONENT32F
    assert info.src_type == texture.GL_FLOAT
    with pytest.raises(ValueError):
        ogl_format(TextureFormat.UNINITIALIZE)