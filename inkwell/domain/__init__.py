# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain layer for the Inkwell blog backend."""

from .identifiers import is_well_formed_id, new_id

__all__ = ["is_well_formed_id", "new_id"]
