"""Artwork storage backed by a local directory."""
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from catalog.config import settings
from catalog.errors import UploadError
from catalog.logging_config import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}


class ArtworkStorage:
    """Stores uploaded artwork under a unique name and returns its public URL.

    PNG uploads are converted to JPEG. Anything else in the allowed set is
    written as-is after checking that Pillow can identify it.
    """

    def __init__(
        self,
        root: Optional[str] = None,
        base_url: Optional[str] = None,
        max_size: Optional[int] = None,
    ):
        self.root = Path(root or settings.artwork_dir)
        self.base_url = (base_url or settings.artwork_base_url).rstrip("/")
        self.max_size = max_size or settings.artwork_max_size

    def save(self, filename: Optional[str], content: bytes) -> str:
        """Store an upload and return its public URL.

        Raises:
            UploadError: bad extension, empty or oversized file, unreadable
                image, or a filesystem failure.
        """
        ext = Path(filename).suffix.lower() if filename else ""
        if ext not in ALLOWED_EXTENSIONS:
            raise UploadError(
                f"Invalid file type. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
            )
        if not content:
            raise UploadError("Empty file")
        if len(content) > self.max_size:
            raise UploadError(f"File too large (max {self.max_size // (1024 * 1024)}MB)")

        try:
            img = Image.open(BytesIO(content))
            img.verify()
        except (UnidentifiedImageError, OSError) as e:
            raise UploadError("File is not a readable image") from e

        name = uuid.uuid4().hex
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            if ext == ".png":
                name = f"{name}.jpg"
                img = Image.open(BytesIO(content)).convert("RGB")
                img.save(self.root / name, "JPEG", quality=95)
            else:
                name = f"{name}{ext}"
                (self.root / name).write_bytes(content)
        except OSError as e:
            logger.error("Artwork write failed", context={"file": name, "error": str(e)})
            raise UploadError("Could not store artwork") from e

        logger.info("Artwork stored", context={"file": name, "bytes": len(content)})
        return f"{self.base_url}/{name}"
