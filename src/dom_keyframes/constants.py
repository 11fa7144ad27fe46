"""Global constants for the application."""

# Animation settings
DEFAULT_FPS = 40  # Frames per second used when exporting frame-unit timelines
DEFAULT_EASE = "Linear.easeNone"  # Fixed interpolation curve for transitions
DEFAULT_ENGINE = "frame"  # Built-in tween engine name

# Namespaces
XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
DEFAULT_NAMESPACES = ("", XHTML_NAMESPACE)  # Encoded as bare tag names in paths

# Environment variable prefix for EngineConfig.from_env
ENV_PREFIX = "DOM_KEYFRAMES_"

# Preview rendering (gif/webp)
PREVIEW_WIDTH = 320
PREVIEW_HEIGHT = 240
PREVIEW_BOX_SIZE = 40
PREVIEW_MAX_FRAMES = 600  # Upper bound on rendered preview frames
PREVIEW_BACKGROUND_COLOR = (13, 17, 23)
PREVIEW_BOX_COLOR = (57, 211, 83)
