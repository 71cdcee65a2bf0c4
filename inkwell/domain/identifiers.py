# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opaque record identifiers shared by users and posts."""

from __future__ import annotations

import re
import uuid

_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    return uuid.uuid4().hex


def is_well_formed_id(value: object) -> bool:
    return isinstance(value, str) and bool(_ID_RE.match(value))


__all__ = ["is_well_formed_id", "new_id"]
