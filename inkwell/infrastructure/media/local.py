# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Media uploader backed by the local filesystem."""

from __future__ import annotations

import secrets
import shutil
import time
from pathlib import Path

from werkzeug.utils import secure_filename

from inkwell.domain.posts.repositories import MediaUploader
from inkwell.shared.logging import logger


class LocalMediaUploader(MediaUploader):
    """Stores files within ``root`` and returns URLs under ``public_url``."""

    def __init__(self, root: Path, *, public_url: str = "/uploads", folder: str = "posts") -> None:
        self._root = root
        self._public_url = public_url.rstrip("/")
        self._folder = secure_filename(folder) or "posts"
        self._root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, relative_path: str) -> Path:
        path = (self._root / relative_path).resolve()
        if not path.is_relative_to(self._root.resolve()):
            msg = "Attempted directory traversal outside storage root"
            raise ValueError(msg)
        return path

    def upload(self, path: Path, *, filename: str) -> str:
        name = secure_filename(filename) or "image"
        relative = f"{self._folder}/{int(time.time() * 1000)}-{secrets.token_hex(4)}-{name}"
        target = self._resolve(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, target)
        logger.debug(f"media.local: stored path={target} size={target.stat().st_size}")
        return f"{self._public_url}/{relative}"


__all__ = ["LocalMediaUploader"]
