"""Console output for timelines and compiled segments."""

import xml.etree.ElementTree as ET
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .compiler import Segment
from .timeline import KeyframeTimeline


class TimelineConsolePrinter:
    """Prints timeline statistics and segment tables with rich."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def display_stats(self, timeline: KeyframeTimeline) -> None:
        """Print a short summary of the timeline."""
        self.console.print(f"\n[bold]Target:[/bold] {timeline.target_kind.value} "
                           f"[cyan]{escape(timeline.path or '-')}[/cyan]")
        self.console.print(f"[bold]Frames:[/bold] {len(timeline)} "
                           f"(last frame {timeline.max_frame_number})")
        self.console.print(f"[bold]Properties:[/bold] {escape(', '.join(timeline.property_names()))}")

        late = timeline.late_origin_properties()
        if late:
            self.console.print(
                f"[yellow]Warning:[/yellow] no frame 0 value for {escape(', '.join(late))}; "
                "their first transition has no authored start value"
            )

    def display_segments(self, segments: Iterable[Segment]) -> None:
        """Print compiled segments in container order."""
        table = Table(title="Segments")
        table.add_column("#", justify="right")
        table.add_column("Property", style="cyan")
        table.add_column("From", justify="right")
        table.add_column("To", justify="right")
        table.add_column("Duration", justify="right")
        table.add_column("Value", justify="right")
        table.add_column("Kind")

        for position, segment in enumerate(segments):
            table.add_row(
                str(segment.index if segment.index is not None else position),
                segment.property,
                str(segment.from_frame),
                str(segment.to_frame),
                str(segment.duration),
                f"{segment.value:g}",
                "initial set" if segment.is_initial_set else "transition",
            )
        self.console.print(table)

    def display_element(self, element: ET.Element, expression: str | None) -> None:
        """Print a resolved element and its canonical path."""
        self.console.print(f"[bold]Element:[/bold] {escape(_describe(element))}")
        self.console.print(f"[bold]Path:[/bold] [cyan]{escape(expression or '-')}[/cyan]")


def _describe(element: ET.Element) -> str:
    attributes = "".join(f' {key}="{value}"' for key, value in element.attrib.items())
    return f"<{element.tag}{attributes}>"
