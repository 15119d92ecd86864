# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Utility modules for form parsing and field definitions."""

from .fields import ConvertFields, FieldDef, SpriteFields, parse_bool
from .forms import FormData, Upload, read_form


__all__ = [
    # Fields
    "ConvertFields",
    "FieldDef",
    # Forms
    "FormData",
    "SpriteFields",
    "Upload",
    "parse_bool",
    "read_form",
]
