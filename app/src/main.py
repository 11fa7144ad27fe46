"""FastAPI web app for compiling and exporting keyframe timelines."""

import xml.etree.ElementTree as ET
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel

from dom_keyframes.config import EngineConfig
from dom_keyframes.constants import DEFAULT_FPS
from dom_keyframes.errors import EngineUnavailableError, KeyframeError
from dom_keyframes.export_pipeline import compile_animation, encode_animation
from dom_keyframes.output import (
    media_type_for_output_format,
    output_path_for_format,
)
from dom_keyframes.timeline import KeyframeTimeline

load_dotenv()

app = FastAPI(title="DOM Keyframes")


class CompileRequest(BaseModel):
    timeline: dict[str, Any]
    document: str


def export_animation(
    request: CompileRequest,
    output_path: str,
    fps: int,
    loop: bool,
) -> bytes:
    """Compile a serialized timeline against a document and encode it."""
    try:
        document = ET.ElementTree(ET.fromstring(request.document))
    except ET.ParseError as e:
        raise ValueError(f"Invalid document: {e}")

    timeline = KeyframeTimeline.from_dict(request.timeline)
    animation = compile_animation(timeline, document, EngineConfig.from_env(), fps=fps)
    return encode_animation(animation, output_path, loop=loop)


@app.post("/api/compile")
async def compile_timeline(
    request: CompileRequest,
    output_format: str = Query(
        "json", alias="format", description="Output format: json, svg, gif, or webp"
    ),
    fps: int = Query(DEFAULT_FPS, ge=1, le=120, description="Frames per second for export"),
    loop: bool = Query(True, description="Repeat animated exports instead of playing once"),
):
    """Compile a timeline and return its segments or an exported animation."""
    try:
        output_path = output_path_for_format(output_format)
        media_type = media_type_for_output_format(output_format)
        encoded = export_animation(request, output_path, fps, loop)
        return Response(
            content=encoded,
            media_type=media_type,
            headers={
                "Content-Disposition": f"inline; filename=timeline.{output_format.lower()}",
            },
        )
    except EngineUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except (ValueError, KeyframeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to compile timeline: {e}")
