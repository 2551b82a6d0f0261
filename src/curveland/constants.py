"""Global constants for the application."""

# Animation settings
DEFAULT_FPS = 60  # Display refresh the frame driver is aligned to
DEFAULT_FRAMES = 240  # Frames simulated by the CLI when none are requested
DEFAULT_STEP_FRAMES = 30  # Frames advanced after each interactive REPL line

# Canvas settings
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
FIT_MARGIN = 0.8  # Fraction of the canvas the fitted path may occupy
MARKER_SIZE = 20  # Side of the square marker in pixels
STROKE_WIDTH = 2

# Motion settings
DEFAULT_SPEED = 1
AMBIENT_STEP = 1  # Distance of the ambient forward advance per frame
MAX_ARGUMENT = 1_000_000  # Largest magnitude a command argument may have

# Colors
BACKGROUND_COLOR = (226, 224, 203)  # E2E0CB
PATH_COLOR = (9, 10, 2)  # 090A02
MARKER_COLOR = (224, 60, 23)  # E03C17
