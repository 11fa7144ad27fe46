"""JSON segment listing provider."""

import json

from ..animation import CompiledAnimation
from .base import OutputProvider


class JsonOutputProvider(OutputProvider):
    """Writes the serialized timeline together with its compiled segments."""

    def encode(self, animation: CompiledAnimation, max_frames: int | None = None) -> bytes:
        del max_frames
        payload = {
            "timeline": animation.timeline.to_dict(),
            "container": {
                "id": animation.container.id,
                "vars": animation.container.vars,
                "duration": animation.container.duration(),
            },
            "segments": [segment.to_dict() for segment in animation.segments],
        }
        return json.dumps(payload, indent=2).encode("utf-8")
