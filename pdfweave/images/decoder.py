"""Pillow-backed decoding of raster images into PDF image XObjects."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import zlib

from PIL import Image, UnidentifiedImageError

from ..core.objects import Name, Stream
from ..core.utils import PathLike, resolve_path
from ..exceptions import ImageLoadError

LOGGER = logging.getLogger("pdfweave.images")

_PASSTHROUGH_JPEG_MODES = {"RGB": "DeviceRGB", "L": "DeviceGray"}
_GRAY_MODES = {"1", "L", "I", "I;16", "F"}
_WHITE = (255, 255, 255)


@dataclass(frozen=True)
class DecodedImage:
    """Pixel dimensions plus an encoded payload ready for embedding."""

    width: int
    height: int
    color_space: str
    filter: str
    data: bytes
    bits_per_component: int = 8

    def to_xobject(self) -> Stream:
        return Stream(
            {
                "Type": Name("XObject"),
                "Subtype": Name("Image"),
                "Width": self.width,
                "Height": self.height,
                "ColorSpace": Name(self.color_space),
                "BitsPerComponent": self.bits_per_component,
                "Filter": Name(self.filter),
            },
            self.data,
        )


def _flatten(img: Image.Image) -> Image.Image:
    """Return an 8-bit RGB or grayscale copy with any alpha laid over white."""

    has_alpha = img.mode in {"RGBA", "LA", "PA"} or (
        img.mode == "P" and "transparency" in img.info
    )
    if has_alpha:
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, _WHITE)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if img.mode in _GRAY_MODES:
        return img.convert("L")
    return img.convert("RGB")


def decode_image(path: PathLike) -> DecodedImage:
    """Decode the image at *path*.

    RGB and grayscale JPEG files are embedded unchanged with ``DCTDecode``;
    every other image is flattened and stored with ``FlateDecode``.

    Raises:
        ImageLoadError: If the file is missing or Pillow cannot decode it.
    """

    source = resolve_path(path)
    if not source.is_file():
        raise ImageLoadError(f"Image file not found: {source}")

    try:
        with Image.open(source) as img:
            img.load()
            if img.format == "JPEG" and img.mode in _PASSTHROUGH_JPEG_MODES:
                LOGGER.debug("Embedding JPEG %s without re-encoding", source)
                return DecodedImage(
                    width=img.width,
                    height=img.height,
                    color_space=_PASSTHROUGH_JPEG_MODES[img.mode],
                    filter="DCTDecode",
                    data=source.read_bytes(),
                )
            flat = _flatten(img)
    except (UnidentifiedImageError, OSError) as exc:
        LOGGER.error("Failed to decode image %s: %s", source, exc)
        raise ImageLoadError(f"Failed to load image: {source}: {exc}") from exc

    color_space = "DeviceGray" if flat.mode == "L" else "DeviceRGB"
    LOGGER.debug("Flattened %s (%s) to %s", source, flat.mode, color_space)
    return DecodedImage(
        width=flat.width,
        height=flat.height,
        color_space=color_space,
        filter="FlateDecode",
        data=zlib.compress(flat.tobytes()),
    )


__all__ = ["DecodedImage", "decode_image"]
