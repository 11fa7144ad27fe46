"""CLI interface for dom-keyframes."""

import sys
import xml.etree.ElementTree as ET
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .animation import CompiledAnimation
from .config import ORIGIN_POLICIES, EngineConfig
from .console_printer import TimelineConsolePrinter
from .constants import DEFAULT_FPS, SVG_NAMESPACE, XHTML_NAMESPACE
from .element_path import Root, get_element, get_expression
from .errors import KeyframeError
from .export_pipeline import compile_animation, encode_animation
from .output import resolve_output_provider, supported_output_formats
from .timeline import KeyframeTimeline

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()
QUERY_NAMESPACES = {"svg": SVG_NAMESPACE, "html": XHTML_NAMESPACE}

app = typer.Typer(help="Compile keyframe timelines and work with element paths.")


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


@app.command("compile")
def compile_command(
    timeline_file: str = typer.Argument(..., help="Timeline JSON file"),
    document_file: str = typer.Option(
        ..., "--document", "-d", help="XML/XHTML/SVG document holding the target"
    ),
    out: str = typer.Option(
        None,
        "--output",
        "-o",
        help=f"Export the compiled animation ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    fps: int = typer.Option(DEFAULT_FPS, "--fps", help="Frames per second used for export"),
    max_frames: int | None = typer.Option(
        None, "--max-frame", help="Maximum number of preview frames to render"
    ),
    ease: str = typer.Option(None, "--ease", help="Override the interpolation curve"),
    origin_policy: str = typer.Option(
        None,
        "--origin-policy",
        help=f"How to treat properties missing at frame 0 ({', '.join(ORIGIN_POLICIES)})",
    ),
    loop: bool = typer.Option(
        True, "--loop/--once", help="Repeat the exported animation or play it once"
    ),
) -> None:
    """
    Compile a timeline against a document and print its segments.

    Examples:
      # Print segments
      dom-keyframes compile timeline.json -d page.xhtml

      # Export an animated document
      dom-keyframes compile timeline.json -d drawing.svg -o animated.svg
    """
    try:
        config = _load_config(ease=ease, origin_policy=origin_policy)
        timeline = _load_timeline(timeline_file)
        document = _load_document(document_file)

        printer = TimelineConsolePrinter(console)
        printer.display_stats(timeline)

        try:
            animation = compile_animation(timeline, document, config, fps=fps)
        except KeyframeError as e:
            raise CLIError(str(e))
        printer.display_segments(animation.segments)
        console.print(f"[bold]Duration:[/bold] {animation.container.duration():g} frames")

        if out:
            _write_output(animation, out, max_frames, loop)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(e))}")
        sys.exit(1)


@app.command("locate")
def locate_command(
    expression: str = typer.Argument(..., help="Element path to resolve"),
    document_file: str = typer.Option(..., "--document", "-d", help="Document to search"),
    root_expression: str = typer.Option(
        None, "--root", "-r", help="Absolute path of the element the expression is relative to"
    ),
) -> None:
    """Resolve an element path and print the element it addresses."""
    try:
        document = _load_document(document_file)
        root = _resolve_root(document, root_expression)
        element = get_element(expression, root)
        if element is None:
            raise CLIError(f"No element at '{expression}'")
        TimelineConsolePrinter(console).display_element(element, get_expression(element, root))

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


@app.command("path-of")
def path_of_command(
    query: str = typer.Argument(
        ..., help="ElementTree query, e.g. \".//html:span[@class='date']\""
    ),
    document_file: str = typer.Option(..., "--document", "-d", help="Document to search"),
    root_expression: str = typer.Option(
        None, "--root", "-r", help="Absolute path of the element to compute a relative path from"
    ),
) -> None:
    """Print the element path of the first element matching a query."""
    try:
        document = _load_document(document_file)
        root = _resolve_root(document, root_expression)
        search_root = root if isinstance(root, ET.Element) else document.getroot()
        try:
            element = search_root.find(query, QUERY_NAMESPACES)
        except SyntaxError as e:
            raise CLIError(f"Invalid query '{query}': {e}")
        if element is None:
            raise CLIError(f"No element matches '{query}'")
        TimelineConsolePrinter(console).display_element(element, get_expression(element, root))

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


def _load_config(**overrides: str | None) -> EngineConfig:
    """Read engine settings from the environment and apply CLI overrides."""
    try:
        return EngineConfig.from_env().with_overrides(**overrides)
    except ValueError as e:
        raise CLIError(str(e))


def _load_timeline(file_path: str) -> KeyframeTimeline:
    """Load a serialized timeline from a JSON file."""
    console.print(f"[bold blue]Loading timeline from {escape(file_path)}...[/bold blue]")
    try:
        with open(file_path, "r") as f:
            return KeyframeTimeline.from_json(f.read())
    except FileNotFoundError:
        raise CLIError(f"File '{file_path}' not found")
    except KeyframeError as e:
        raise CLIError(f"Invalid timeline in '{file_path}': {e}")


def _load_document(file_path: str) -> ET.ElementTree:
    """Parse an XML document."""
    try:
        return ET.parse(file_path)
    except FileNotFoundError:
        raise CLIError(f"File '{file_path}' not found")
    except ET.ParseError as e:
        raise CLIError(f"Invalid XML in '{file_path}': {e}")


def _resolve_root(document: ET.ElementTree, root_expression: str | None) -> Root:
    if root_expression is None:
        return document
    root = get_element(root_expression, document)
    if root is None:
        raise CLIError(f"No root element at '{root_expression}'")
    return root


def _write_output(
    animation: CompiledAnimation, output_path: str, max_frames: int | None, loop: bool
) -> None:
    """Export the animation in the format implied by the output path."""
    ext = Path(output_path).suffix[1:].upper()
    console.print(f"\n[bold blue]Generating {escape(ext)} output...[/bold blue]")
    try:
        provider = resolve_output_provider(output_path, loop=loop)
        encoded = encode_animation(
            animation, output_path, max_frames=max_frames, provider=provider
        )
    except ValueError as e:
        raise CLIError(f"Failed to generate output: {e}")

    console.print(f"[bold blue]Saving to {escape(output_path)}...[/bold blue]")
    try:
        provider.write(encoded)
    except OSError as e:
        raise CLIError(f"Failed to save file '{output_path}': {e}")
    console.print(f"[green]✓[/green] {escape(ext)} saved to {escape(output_path)}")


if __name__ == "__main__":
    app()
