# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Temporary on-disk staging for incoming image uploads."""

from __future__ import annotations

import os
import secrets
import time
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from pathlib import Path

from werkzeug.utils import secure_filename

from inkwell.domain.posts.entities import ImageUpload
from inkwell.domain.posts.repositories import ImageStaging
from inkwell.shared.errors import ImageTooLargeError, UnsupportedImageTypeError
from inkwell.shared.logging import logger

_CHUNK_SIZE = 64 * 1024


def is_image_type(content_type: str | None) -> bool:
    return bool(content_type) and content_type.lower().startswith("image/")


class TemporaryImageStaging(ImageStaging):
    """Copies an upload into ``tmp_dir`` for the duration of a ``with`` block.

    The size limit is enforced while copying, so an oversized body is never
    fully written. The staged file is removed on exit, including on error.
    """

    def __init__(self, tmp_dir: Path, *, max_bytes: int) -> None:
        self._tmp_dir = tmp_dir
        self._max_bytes = max_bytes
        self._tmp_dir.mkdir(parents=True, exist_ok=True)

    def _target_for(self, filename: str) -> Path:
        safe = secure_filename(filename) or "image"
        return self._tmp_dir / f"{int(time.time() * 1000)}-{secrets.token_hex(4)}-{safe}"

    @contextmanager
    def stage(self, upload: ImageUpload) -> Iterator[Path]:
        if not is_image_type(upload.content_type):
            raise UnsupportedImageTypeError(upload.content_type)

        target = self._target_for(upload.filename)
        try:
            written = 0
            with open(target, "wb") as fh:
                while True:
                    chunk = upload.stream.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self._max_bytes:
                        raise ImageTooLargeError(self._max_bytes)
                    fh.write(chunk)
                fh.flush()
                os.fsync(fh.fileno())
            logger.debug(f"media.staging: staged {target.name} size={written}")
            yield target
        finally:
            with suppress(FileNotFoundError):
                target.unlink()
            logger.debug(f"media.staging: removed {target.name}")


__all__ = ["TemporaryImageStaging", "is_image_type"]
