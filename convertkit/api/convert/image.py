# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import asyncio
import io
import logging
import zipfile

from aiohttp import web

from ...config import Config
from ...media.processing import ImageFormat, convert_image
from ...utils.forms import Upload, read_form
from .options import ConvertOptions


ARCHIVE_FILENAME = "converted_images.zip"


async def handle_convert_image_request(request: web.Request) -> web.Response:
    """Handle POST /api/convert-image with one or many uploaded images."""
    logger = logging.getLogger("convert")
    try:
        form = await read_form(request)
        uploads = form.files("file", "files")

        if not uploads or not form.params.get("targetFormat", "").strip():
            return web.json_response({"error": "Missing file or target format"}, status=400)

        options = ConvertOptions.from_form_params(form.params, Config())

    except web.HTTPRequestEntityTooLarge as e:
        logger.warning(f"Rejected oversized upload: {e.text}")
        return web.json_response({"error": "Upload too large"}, status=413)
    except ValueError as e:
        return web.json_response({"error": str(e)}, status=400)

    options.log_info(len(uploads))
    loop = asyncio.get_running_loop()

    try:
        if len(uploads) == 1 and not options.multiple_files:
            upload = uploads[0]
            data = await loop.run_in_executor(
                None, convert_image, upload.data, options.target_format, options.size, options.fit, upload.filename
            )
            fmt = options.target_format
            return web.Response(
                body=data,
                content_type=fmt.content_type,
                headers={"Content-Disposition": f'attachment; filename="converted.{fmt.value}"'},
            )

        zip_data = await loop.run_in_executor(None, create_converted_zip, uploads, options)
        return web.Response(
            body=zip_data,
            content_type="application/zip",
            headers={"Content-Disposition": f'attachment; filename="{ARCHIVE_FILENAME}"'},
        )

    except Exception as e:
        logger.error(f"Error converting images: {e}", exc_info=True)
        return web.json_response({"error": "Image conversion failed"}, status=500)


def archive_entry_name(filename: str, target_format: ImageFormat, used: set[str]) -> str:
    """Entry name for a converted upload: original stem plus the target extension.

    Names already in ``used`` get a numeric suffix so every upload keeps its own entry.
    """
    basename = filename.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, _ = basename.rpartition(".")
    stem = (stem if dot else basename).strip() or "image"
    name = f"{stem}.{target_format.value}"
    n = 2
    while name in used:
        name = f"{stem}_{n}.{target_format.value}"
        n += 1
    used.add(name)
    return name


def create_converted_zip(uploads: list[Upload], options: ConvertOptions) -> bytes:
    """Convert every upload in order and bundle the results into one ZIP."""
    zip_buffer = io.BytesIO()
    used: set[str] = set()
    level = int(Config().get("convert.zip_level"))

    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED, compresslevel=level) as zip_file:
        for upload in uploads:
            data = convert_image(upload.data, options.target_format, options.size, options.fit, upload.filename)
            zip_file.writestr(archive_entry_name(upload.filename, options.target_format, used), data)

    logging.getLogger("convert").info(f"Archived {len(uploads)} converted images")
    return zip_buffer.getvalue()
