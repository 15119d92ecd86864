# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import asyncio
import logging
from typing import Any

from aiohttp import web

from ...config import Config
from ...media.exceptions import SpriteCompileError
from ...sprite import SpriteCompiler, SpriteConfig, generate_examples
from ...utils.forms import Upload, read_form
from .options import SpriteOptions


async def handle_sprite_request(request: web.Request) -> web.Response:
    """Handle POST /api/generate-svg-sprite with uploaded SVG files."""
    logger = logging.getLogger("sprite")
    try:
        form = await read_form(request)
        uploads = form.files("files")

        if not uploads:
            return web.json_response({"error": "Missing SVG files"}, status=400)

        options = SpriteOptions.from_form_params(form.params, Config())

    except web.HTTPRequestEntityTooLarge as e:
        logger.warning(f"Rejected oversized upload: {e.text}")
        return web.json_response({"error": "Upload too large"}, status=413)
    except ValueError as e:
        return web.json_response({"error": str(e)}, status=400)

    logger.info(f"Generating {options.mode.value} sprite from {len(uploads)} files")
    loop = asyncio.get_running_loop()

    try:
        payload = await loop.run_in_executor(None, build_sprite_payload, uploads, options)
        return web.json_response(payload)

    except Exception as e:
        logger.error(f"Error generating sprite: {e}", exc_info=True)
        return web.json_response({"error": "Sprite generation failed"}, status=500)


def build_sprite_payload(uploads: list[Upload], options: SpriteOptions) -> dict[str, Any]:
    """Compile uploads into a sprite and package it with usage examples.

    Raises:
        SpriteCompileError: a shape could not be parsed or the mode produced no output
    """
    compiler = SpriteCompiler(SpriteConfig.from_config(options.mode, Config()))
    for upload in uploads:
        compiler.add(upload.filename, upload.data)

    result = compiler.compile()
    mode_result = result.get(options.mode.value)
    if mode_result is None:
        raise SpriteCompileError(f"Compilation produced no {options.mode.value} sprite")

    sprite = mode_result.sprite
    payload: dict[str, Any] = {
        "svg": {"content": sprite.contents, "filename": sprite.filename},
        "examples": generate_examples(options.mode, compiler.shape_ids, sprite.filename),
    }

    if mode_result.css is not None:
        payload["css"] = {"content": mode_result.css.contents, "filename": mode_result.css.filename}

    return payload
