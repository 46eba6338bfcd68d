# image_handler.py - Cover images for exported documents
import base64
import binascii
import io
import logging
import os
import re

from PIL import Image, UnidentifiedImageError

from config import EXPORT_CONFIG

logger = logging.getLogger(__name__)

DATA_URI = re.compile(r"^data:image/[\w.+-]+;base64,(?P<payload>.+)$", re.DOTALL)


class ImageHandler:
    """Resolve a cover image reference into JPEG bytes ready for embedding.

    References may be base64 data URIs or local file paths. Remote URLs are not
    fetched. Anything unreadable resolves to ``None`` so exports carry on
    without a cover.
    """

    def __init__(self, base_path=None, settings=None):
        self.base_path = base_path
        self.settings = {
            "max_width": EXPORT_CONFIG["cover_max_width"],
            "quality": EXPORT_CONFIG["cover_jpeg_quality"]
        }
        self.settings.update(settings or {})

    def read_reference(self, reference):
        if not isinstance(reference, str) or not reference.strip():
            return None
        reference = reference.strip()

        match = DATA_URI.match(reference)
        if match:
            try:
                return base64.b64decode(match.group("payload"), validate=False)
            except (binascii.Error, ValueError):
                logger.warning("Cover image data URI is not valid base64")
                return None

        if reference.startswith(("http://", "https://")):
            logger.info("Skipping remote cover image %s", reference)
            return None

        path = reference
        if self.base_path and not os.path.isabs(path):
            path = os.path.join(self.base_path, path)
        if not os.path.isfile(path):
            logger.warning("Cover image not found: %s", path)
            return None
        with open(path, "rb") as f:
            return f.read()

    def optimize_image(self, image):
        if image.mode != "RGB":
            rgba = image.convert("RGBA")
            bg = Image.new("RGB", rgba.size, (255, 255, 255))
            bg.paste(rgba, mask=rgba.split()[-1])
            image = bg

        width, height = image.size
        max_width = self.settings["max_width"]
        if width > max_width:
            image = image.resize((max_width, int(max_width * height / width)), Image.Resampling.LANCZOS)
        return image

    def load_cover(self, reference):
        """Return JPEG bytes for the reference, or None when it cannot be used."""
        data = self.read_reference(reference)
        if not data:
            return None
        buffer = io.BytesIO()
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                image = self.optimize_image(img)
                image.save(buffer, format="JPEG", quality=self.settings["quality"], optimize=True)
        except (UnidentifiedImageError, OSError) as e:
            logger.warning("Cover image could not be decoded: %s", e)
            return None
        return buffer.getvalue()
