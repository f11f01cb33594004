"""File staging for uploaded post images.

Uploads land in a temporary folder under a random name first; a post that
references one of those names moves the file into permanent storage when the
post is created.
"""
from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO

from inkpost.core.settings import settings

logger = logging.getLogger(__name__)


class ImageNotFoundError(FileNotFoundError):
    """Raised when a referenced upload is not present in the temp folder."""


class FileStager:
    """Moves uploads between the temporary and permanent folders."""

    def __init__(self, temp_dir: Path | None = None, target_dir: Path | None = None) -> None:
        self.temp_dir = Path(temp_dir) if temp_dir is not None else settings.temp_folder_path
        self.target_dir = Path(target_dir) if target_dir is not None else settings.post_image_path

    def save_upload(self, stream: BinaryIO, original_name: str) -> str:
        """Write ``stream`` into the temp folder and return the generated name."""
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        file_name = f"{uuid.uuid4()}{Path(original_name).suffix}"
        with (self.temp_dir / file_name).open("wb") as out:
            shutil.copyfileobj(stream, out)
        logger.info("Staged upload %s as %s", original_name, file_name)
        return file_name

    def promote(self, file_name: str) -> Path:
        """Move ``file_name`` from the temp folder into permanent storage.

        Raises:
            ImageNotFoundError: If the temp file does not exist.
        """
        # Only the base name is honored so callers cannot escape the temp folder.
        source = self.temp_dir / Path(file_name).name
        if not source.is_file():
            raise ImageNotFoundError(f"File does not exist: {file_name}")

        self.target_dir.mkdir(parents=True, exist_ok=True)
        destination = self.target_dir / source.name
        shutil.move(str(source), str(destination))
        logger.info("Moved %s into %s", source.name, self.target_dir)
        return destination


def get_file_stager() -> FileStager:
    """Return a stager bound to the configured folders."""
    return FileStager()
