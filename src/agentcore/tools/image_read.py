"""
Image reading tool for agentcore.

imageRead returns the raw bytes of one or more images so they can be
passed to a model. Images are never decoded; the format is taken from the
file extension.
"""

import asyncio
import os
import re
import stat
from pathlib import Path
from typing import Any, ClassVar

from agentcore.errors import CustomExecutionError
from agentcore.tools.base import (
    BuiltInToolModel,
    ImageBlock,
    ImageFormat,
    ImageItem,
    ToolContext,
    ToolExecutionOutput,
)
from agentcore.tools.names import BuiltInToolName
from agentcore.util.path import canonicalize_path
from agentcore.util.platform import Platform

IMAGE_READ_TOOL_DESCRIPTION = """
A tool for reading images.

WHEN TO USE THIS TOOL:
- Use when you want to read a file that you know is a supported image

HOW TO USE:
- Provide a list of paths to images you want to read

FEATURES:
- Able to read the following image formats: {IMAGE_FORMATS}
- Can read multiple images in one go

LIMITATIONS:
- Maximum supported image size is 10 MB
"""

IMAGE_READ_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "paths": {
            "type": "array",
            "description": "List of paths to images to read",
            "items": {
                "type": "string",
                "description": "Path to an image",
            },
        },
    },
    "required": ["paths"],
}

# macOS names screenshots "Screenshot 2025-03-13 at 1.46.32 PM.png", with a
# narrow no-break space before AM/PM that models reproduce as a plain space.
_MAC_SCREENSHOT = re.compile(r"Screenshot \d{4}-\d{2}-\d{2} at \d{1,2}\.\d{2}\.\d{2} [AP]M")
_NNBSP = "\u202f"


def pre_process_image_path(path: str, platform: Platform) -> str:
    """Restore the narrow no-break space in macOS screenshot file names."""
    if not platform.fix_screenshot_names or "Screenshot" not in path:
        return path
    if not _MAC_SCREENSHOT.search(path):
        return path
    pos = path.find(" at ")
    if pos == -1:
        return path
    head, tail = path[: pos + 4], path[pos + 4 :]
    return head + tail.replace(" ", _NNBSP)


def _image_format(path: str) -> ImageFormat | None:
    suffix = Path(path).suffix
    if not suffix:
        return None
    return ImageFormat.from_extension(suffix[1:])


def is_supported_image_type(path: str) -> bool:
    """Whether `path` has the extension of a supported image format."""
    return _image_format(path) is not None


def _read_image(path: str, max_size_bytes: int) -> ImageBlock:
    suffix = Path(path).suffix
    if not suffix:
        raise ValueError("missing extension")
    fmt = ImageFormat.from_extension(suffix[1:])
    if fmt is None:
        raise ValueError(f"unsupported format: {suffix[1:].lower()}")

    try:
        size = os.lstat(path).st_size
    except (OSError, ValueError) as e:
        raise ValueError(f"failed to read file metadata for {path}: {e}") from e
    if size > max_size_bytes:
        raise ValueError(
            f"image at {path} has size {size} bytes, but the max supported size is {max_size_bytes}"
        )

    try:
        data = Path(path).read_bytes()
    except (OSError, ValueError) as e:
        raise ValueError(f"failed to read image at {path}: {e}") from e
    return ImageBlock(format=fmt, source=data)


async def read_image(path: str, max_size_bytes: int) -> ImageBlock:
    """
    Read an image if it has a supported format and is within the size limit.

    Raises:
        ValueError: With a model friendly message describing the problem
    """
    return await asyncio.to_thread(_read_image, path, max_size_bytes)


class ImageRead(BuiltInToolModel):
    """
    Read one or more images.

    Arguments:
        paths (list[str]): Images to read (required)
    """

    tool_name: ClassVar[BuiltInToolName] = BuiltInToolName.IMAGE_READ
    INPUT_SCHEMA: ClassVar[dict[str, Any] | None] = IMAGE_READ_SCHEMA

    paths: list[str]

    @classmethod
    def description(cls) -> str:
        formats = ", ".join(fmt.value for fmt in ImageFormat)
        return IMAGE_READ_TOOL_DESCRIPTION.replace("{IMAGE_FORMATS}", formats)

    def processed_paths(self, ctx: ToolContext) -> list[str]:
        """
        Canonicalize every path and apply the screenshot name fix.

        Raises:
            ValueError: If a path cannot be canonicalized
        """
        paths = []
        for raw in self.paths:
            try:
                path = canonicalize_path(raw, ctx.provider)
            except ValueError as e:
                raise ValueError(f"failed to process path {raw}: {e}") from e
            paths.append(pre_process_image_path(path, ctx.platform))
        return paths

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        try:
            paths = self.processed_paths(ctx)
        except ValueError as e:
            return [str(e)]

        max_size = ctx.config.tools.image_read.max_size_bytes
        errors = []
        for path in paths:
            if not is_supported_image_type(path):
                errors.append(f"'{path}' is not a supported image type")
                continue
            try:
                st = await asyncio.to_thread(os.lstat, path)
            except (OSError, ValueError) as e:
                errors.append(f"failed to read file metadata for path {path}: {e}")
                continue
            if not stat.S_ISREG(st.st_mode):
                errors.append(f"'{path}' is not a file")
                continue
            if st.st_size > max_size:
                errors.append(
                    f"'{path}' has size {st.st_size} which is greater than the max supported size of {max_size}"
                )
        return errors

    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        try:
            paths = self.processed_paths(ctx)
        except ValueError as e:
            raise CustomExecutionError(message=str(e)) from e

        max_size = ctx.config.tools.image_read.max_size_bytes
        items = []
        errors = []
        for path in paths:
            try:
                items.append(ImageItem(await read_image(path, max_size)))
            except ValueError as e:
                errors.append(str(e))

        if errors:
            raise CustomExecutionError(message="\n".join(errors))
        return ToolExecutionOutput(items)
