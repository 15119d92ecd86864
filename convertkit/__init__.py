# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Image conversion and SVG sprite generation server."""

__version__ = "0.1.0"
