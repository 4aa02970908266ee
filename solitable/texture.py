"""Texture formats, bitmaps and their OpenGL upload parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

GL_INVALID_ENUM = 0x0500
GL_UNSIGNED_BYTE = 0x1401
GL_FLOAT = 0x1406
GL_HALF_FLOAT = 0x140B
GL_DEPTH_COMPONENT = 0x1902
GL_RED = 0x1903
GL_RGB = 0x1907
GL_RGBA = 0x1908
GL_RGB8 = 0x8051
GL_RGBA8 = 0x8058
GL_RG = 0x8227
GL_R8 = 0x8229
GL_RG8 = 0x822B
GL_COMPRESSED_RGB_S3TC_DXT1_EXT = 0x83F0
GL_COMPRESSED_RGBA_S3TC_DXT3_EXT = 0x83F2
GL_COMPRESSED_RGBA_S3TC_DXT5_EXT = 0x83F3
GL_RGBA16F = 0x881A
GL_SRGB8 = 0x8C41
GL_SRGB8_ALPHA8 = 0x8C43
GL_COMPRESSED_SRGB_S3TC_DXT1_EXT = 0x8C4C
GL_COMPRESSED_SRGB_ALPHA_S3TC_DXT3_EXT = 0x8C4E
GL_COMPRESSED_SRGB_ALPHA_S3TC_DXT5_EXT = 0x8C4F
GL_DEPTH_COMPONENT32F = 0x8CAC


class TextureFormat(IntEnum):
    """Pixel layouts a texture can have."""

    UNINITIALIZE = 0
    ARGB8888 = 1
    RGB888 = 2
    ARGB_HALF = 3
    R8 = 4
    RG88 = 5
    DXT1 = 6
    DXT3 = 7
    DXT5 = 8
    DEPTH32F = 9


_BYTES_PER_TEXEL = {
    TextureFormat.R8: 1,
    TextureFormat.RG88: 2,
    TextureFormat.RGB888: 3,
    TextureFormat.ARGB8888: 4,
    TextureFormat.DEPTH32F: 4,
}

_FORMAT_FOR_CHANNELS = {
    1: TextureFormat.R8,
    2: TextureFormat.RG88,
    3: TextureFormat.RGB888,
    4: TextureFormat.ARGB8888,
}


def bytes_per_texel(texture_format: TextureFormat) -> int:
    """Bytes one texel takes in an uncompressed format."""
    try:
        return _BYTES_PER_TEXEL[TextureFormat(texture_format)]
    except (KeyError, ValueError):
        raise ValueError(f"texture format {texture_format!r} has no fixed texel size") from None


def format_for_channels(channels_count: int) -> TextureFormat:
    """The uncompressed format with ``channels_count`` color channels."""
    try:
        return _FORMAT_FOR_CHANNELS[channels_count]
    except KeyError:
        raise ValueError(f"no texture format has {channels_count} color channels") from None


@dataclass
class Bitmap:
    """Raw image data in memory."""

    width: int = 0
    height: int = 0
    data: bytearray = field(default_factory=bytearray, repr=False)
    components: int = 0
    format: TextureFormat = TextureFormat.UNINITIALIZE
    num_mipmap_levels: int = 1

    @classmethod
    def allocate(cls, width: int, height: int, texture_format: TextureFormat) -> "Bitmap":
        """A zero-filled bitmap of the given size and format."""
        if width < 0 or height < 0:
            raise ValueError(f"invalid bitmap size {width}x{height}")
        size = width * height * bytes_per_texel(texture_format)
        return cls(
            width=width,
            height=height,
            data=bytearray(size),
            format=TextureFormat(texture_format),
            num_mipmap_levels=1,
        )


@dataclass(frozen=True)
class OpenglTextureInfo:
    """Formats and unpack parameters for uploading a texture to OpenGL."""

    dest_format: int = GL_INVALID_ENUM
    src_format: int = GL_INVALID_ENUM
    src_type: int = GL_INVALID_ENUM
    alignment: int = 4
    compressed: bool = False
    block_size: int = 0


def _linear_only(texture_format: TextureFormat, srgb: bool) -> None:
    if srgb:
        raise ValueError(f"texture format {texture_format.name} has no sRGB variant")


def ogl_format(texture_format: TextureFormat, srgb: bool = False) -> OpenglTextureInfo:
    """The OpenGL upload parameters for ``texture_format``."""
    tf = TextureFormat(texture_format)
    if tf is TextureFormat.R8:
        _linear_only(tf, srgb)
        return OpenglTextureInfo(GL_R8, GL_RED, GL_UNSIGNED_BYTE)
    if tf is TextureFormat.RG88:
        _linear_only(tf, srgb)
        return OpenglTextureInfo(GL_RG8, GL_RG, GL_UNSIGNED_BYTE)
    if tf is TextureFormat.RGB888:
        return OpenglTextureInfo(
            GL_SRGB8 if srgb else GL_RGB8, GL_RGB, GL_UNSIGNED_BYTE, alignment=1
        )
    if tf is TextureFormat.ARGB8888:
        return OpenglTextureInfo(
            GL_SRGB8_ALPHA8 if srgb else GL_RGBA8, GL_RGBA, GL_UNSIGNED_BYTE
        )
    if tf is TextureFormat.ARGB_HALF:
        _linear_only(tf, srgb)
        return OpenglTextureInfo(GL_RGBA16F, GL_RGBA, GL_HALF_FLOAT)
    if tf is TextureFormat.DXT1:
        dest = GL_COMPRESSED_SRGB_S3TC_DXT1_EXT if srgb else GL_COMPRESSED_RGB_S3TC_DXT1_EXT
        return OpenglTextureInfo(dest_format=dest, compressed=True, block_size=8)
    if tf is TextureFormat.DXT3:
        dest = (
            GL_COMPRESSED_SRGB_ALPHA_S3TC_DXT3_EXT if srgb else GL_COMPRESSED_RGBA_S3TC_DXT3_EXT
        )
        return OpenglTextureInfo(dest_format=dest, compressed=True, block_size=16)
    if tf is TextureFormat.DXT5:
        dest = (
            GL_COMPRESSED_SRGB_ALPHA_S3TC_DXT5_EXT if srgb else GL_COMPRESSED_RGBA_S3TC_DXT5_EXT
        )
        return OpenglTextureInfo(dest_format=dest, compressed=True, block_size=16)
    if tf is TextureFormat.DEPTH32F:
        _linear_only(tf, srgb)
        return OpenglTextureInfo(GL_DEPTH_COMPONENT32F, GL_DEPTH_COMPONENT, GL_FLOAT)
    raise ValueError(f"texture format {tf.name} is unsupported")