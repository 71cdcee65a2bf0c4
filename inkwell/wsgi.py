# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from inkwell.app import create_app

app = create_app()
