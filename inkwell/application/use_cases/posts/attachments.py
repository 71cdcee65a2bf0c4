# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from inkwell.domain.posts.entities import ImageUpload
from inkwell.domain.posts.exceptions import MediaUploadError
from inkwell.domain.posts.repositories import ImageStaging, MediaUploader
from inkwell.shared.errors import AppError
from inkwell.shared.logging import logger


class AttachmentStore:
    """Stages an incoming image to a temporary file and pushes it to media.

    The temporary file is removed whether the upload succeeds or not.
    """

    def __init__(self, *, staging: ImageStaging, uploader: MediaUploader) -> None:
        self._staging = staging
        self._uploader = uploader

    def store(self, upload: ImageUpload) -> str:
        with self._staging.stage(upload) as path:
            try:
                url = self._uploader.upload(path, filename=upload.filename)
            except AppError:
                raise
            except Exception as exc:
                logger.exception(f"media.upload: err filename={upload.filename!r}")
                raise MediaUploadError(type(exc).__name__) from exc
        logger.info(f"media.upload: ok filename={upload.filename!r}")
        return url
