# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

from dataclasses import dataclass, field
from urllib.parse import unquote

from aiohttp import web


@dataclass
class Upload:
    """One file part of a multipart form."""

    filename: str
    data: bytes
    content_type: str | None = None


@dataclass
class FormData:
    """Multipart form split into plain string params and file uploads."""

    params: dict[str, str] = field(default_factory=dict)
    uploads: dict[str, list[Upload]] = field(default_factory=dict)

    def files(self, *names: str) -> list[Upload]:
        """Uploads under any of the given field names, in field order."""
        return [upload for name in names for upload in self.uploads.get(name, [])]


async def read_form(request: web.Request) -> FormData:
    """Read a multipart/urlencoded body into a FormData.

    Empty file parts (an <input type=file> with nothing selected) are skipped.
    Filenames arrive percent-encoded from aiohttp and browser clients and are
    decoded here.
    Raises web.HTTPRequestEntityTooLarge when the body exceeds client_max_size.
    """
    form = FormData()
    post = await request.post()

    for name, value in post.items():
        if isinstance(value, web.FileField):
            data = value.file.read()
            if not value.filename and not data:
                continue
            form.uploads.setdefault(name, []).append(
                Upload(filename=unquote(value.filename or ""), data=data, content_type=value.content_type)
            )
        else:
            # Last value wins for repeated plain fields
            form.params[name] = str(value)

    return form
