"""Output providers for compiled animations."""

from dataclasses import dataclass
from pathlib import Path

from .base import OutputProvider
from .json_provider import JsonOutputProvider
from .raster import GifOutputProvider, RasterPreviewProvider, WebPOutputProvider
from .svg_provider import SvgOutputProvider


@dataclass(frozen=True)
class OutputFormat:
    """A named export format; the name doubles as the file extension."""

    name: str
    media_type: str
    provider_class: type[OutputProvider]
    animated: bool = True

    @property
    def extension(self) -> str:
        return f".{self.name}"

    def create_provider(self, path: str, loop: bool = True) -> OutputProvider:
        if self.animated:
            return self.provider_class(path, loop=loop)
        return self.provider_class(path)


_OUTPUT_FORMATS: dict[str, OutputFormat] = {
    fmt.name: fmt
    for fmt in (
        OutputFormat("json", "application/json", JsonOutputProvider, animated=False),
        OutputFormat("svg", "image/svg+xml", SvgOutputProvider),
        OutputFormat("gif", "image/gif", GifOutputProvider),
        OutputFormat("webp", "image/webp", WebPOutputProvider),
    )
}


def supported_output_formats() -> tuple[str, ...]:
    """Return supported output format names."""
    return tuple(_OUTPUT_FORMATS)


def output_format_for_path(file_path: str) -> OutputFormat:
    """
    Look up the export format implied by a file extension.

    Raises:
        ValueError: If the extension is not a supported format
    """
    ext = Path(file_path).suffix.lower()
    fmt = _OUTPUT_FORMATS.get(ext.removeprefix("."))
    if fmt is None:
        supported = ", ".join(f.extension for f in _OUTPUT_FORMATS.values())
        raise ValueError(f"Unsupported output format: {ext}. Supported formats: {supported}")
    return fmt


def output_format_named(output_format: str) -> OutputFormat:
    """Look up an export format by name (case insensitive)."""
    fmt = _OUTPUT_FORMATS.get(output_format.lower())
    if fmt is None:
        raise ValueError(f"Invalid format. Choose from: {', '.join(_OUTPUT_FORMATS)}")
    return fmt


def resolve_output_provider(file_path: str, loop: bool = True) -> OutputProvider:
    """Create the provider for ``file_path``; ``loop`` applies to animated formats."""
    return output_format_for_path(file_path).create_provider(file_path, loop=loop)


def media_type_for_output_format(output_format: str) -> str:
    return output_format_named(output_format).media_type


def output_path_for_format(output_format: str, base_name: str = "output") -> str:
    """Build a synthetic output path from an output format name."""
    return f"{base_name}{output_format_named(output_format).extension}"


__all__ = [
    "OutputFormat",
    "OutputProvider",
    "RasterPreviewProvider",
    "GifOutputProvider",
    "JsonOutputProvider",
    "SvgOutputProvider",
    "WebPOutputProvider",
    "output_format_for_path",
    "output_format_named",
    "resolve_output_provider",
    "supported_output_formats",
    "media_type_for_output_format",
    "output_path_for_format",
]
