# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from inkwell.domain.posts.repositories import MediaUploader
from inkwell.infrastructure.resilience import default_breaker
from inkwell.shared.config import AppConfig

from .cloudinary import CloudinaryMediaUploader
from .local import LocalMediaUploader
from .staging import TemporaryImageStaging, is_image_type


def build_media_uploader(config: AppConfig) -> MediaUploader:
    media = config.media
    if media.backend == "cloudinary":
        return CloudinaryMediaUploader(
            cloud_name=media.cloudinary_cloud_name or "",
            api_key=media.cloudinary_api_key or "",
            api_secret=media.cloudinary_api_secret or "",
            folder=media.cloudinary_folder,
            timeout=config.resilience.default_timeout,
            breaker=default_breaker(),
        )
    return LocalMediaUploader(
        media.upload_dir,
        public_url=media.public_url,
    )


__all__ = [
    "CloudinaryMediaUploader",
    "LocalMediaUploader",
    "TemporaryImageStaging",
    "build_media_uploader",
    "is_image_type",
]
