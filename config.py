"""Central configuration for formula image preprocessing.

All tunable parameters are defined here with descriptive names.
They seed the defaults of preprocessing.ProcessorConfig; callers override
them per run by passing an explicit config.
"""

# =============================================================================
# CANVAS
# =============================================================================

# Final output size in pixels. Every processed formula lands on a canvas of
# exactly this size.
CANVAS_WIDTH = 300
CANVAS_HEIGHT = 100

# White margin kept free on every side of the canvas
BORDER_PX = 5

# Value used for the canvas background (white)
BACKGROUND_VALUE = 255

# Interpolation filter used when scaling the cropped formula.
# One of: nearest, linear, cubic, area, lanczos
INTERPOLATION = "lanczos"

# =============================================================================
# INK DETECTION
# =============================================================================

# A pixel is ink when its (contrast-stretched) luminance is strictly below
# this value. Anything at or above counts as paper.
BACKGROUND_THRESHOLD = 250

# =============================================================================
# POLARITY (light strokes on dark paper)
# =============================================================================

# Invert images whose dark pixels outnumber light pixels two to one.
# Off by default: gray paper or heavy strokes would be flipped too.
AUTO_INVERT = False

# Pixels below this count as dark when deciding polarity
INVERT_DARK_THRESHOLD = 128

# Pixels above this count as light when deciding polarity
INVERT_LIGHT_THRESHOLD = 200

# Dark pixels must exceed light pixels by this factor to trigger inversion
INVERT_DOMINANCE_RATIO = 2

# =============================================================================
# BATCH PROCESSING
# =============================================================================

# Extensions picked up when processing a directory (matched case-insensitively)
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg"}

# Output directory (relative to the current directory) used by the CLI
DEFAULT_OUTPUT_DIR = "processed-formulas"

# Batch strategy used when none is requested: "parallel" or "sequential"
DEFAULT_BATCH_STRATEGY = "parallel"

# Thread pool size for parallel batches. None lets the executor decide.
DEFAULT_WORKERS = None
