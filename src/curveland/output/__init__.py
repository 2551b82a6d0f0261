"""Output providers for traced runs, selected by file extension."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .base import OutputProvider
from .exporter import FileExporter, export_still
from .pillow_providers import GifOutputProvider, PngOutputProvider, WebPOutputProvider
from .png_dataurl_provider import PngDataUrlOutputProvider, png_data_url
from .svg_provider import SvgOutputProvider


@dataclass(frozen=True)
class OutputFormat:
    """A file format a run can be written as."""

    name: str
    media_type: str
    provider_class: type[OutputProvider[Any]]

    @property
    def extension(self) -> str:
        return f".{self.name}"


OUTPUT_FORMATS: tuple[OutputFormat, ...] = (
    OutputFormat("gif", "image/gif", GifOutputProvider),
    OutputFormat("webp", "image/webp", WebPOutputProvider),
    OutputFormat("png", "image/png", PngOutputProvider),
    OutputFormat("svg", "image/svg+xml", SvgOutputProvider),
)
_BY_NAME = {output_format.name: output_format for output_format in OUTPUT_FORMATS}


def resolve_output_provider(file_path: str) -> OutputProvider[Any]:
    """
    Pick the provider for an output path.

    Raises:
        ValueError: If the extension names no supported format
    """
    ext = Path(file_path).suffix.lower()
    output_format = _BY_NAME.get(ext.removeprefix("."))
    if output_format is None:
        extensions = ", ".join(known.extension for known in OUTPUT_FORMATS)
        raise ValueError(f"Unsupported output format: {ext}. Supported formats: {extensions}")
    return output_format.provider_class(file_path)


def supported_output_formats() -> tuple[str, ...]:
    return tuple(_BY_NAME)


def media_type_for_output_format(name: str) -> str:
    output_format = _BY_NAME.get(name.lower())
    if output_format is None:
        raise ValueError(f"Invalid format. Choose from: {', '.join(_BY_NAME)}")
    return output_format.media_type


__all__ = [
    "OUTPUT_FORMATS",
    "FileExporter",
    "GifOutputProvider",
    "OutputFormat",
    "OutputProvider",
    "PngDataUrlOutputProvider",
    "PngOutputProvider",
    "SvgOutputProvider",
    "WebPOutputProvider",
    "export_still",
    "media_type_for_output_format",
    "png_data_url",
    "resolve_output_provider",
    "supported_output_formats",
]
