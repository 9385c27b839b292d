import logging

# Pathfinding settings
# Cost of a north/south/east/west step
CARDINAL_COST = 10
# Cost of a north-east/north-west/south-east/south-west step
DIAGONAL_COST = 14

# Grid settings
DEFAULT_GRID_WIDTH = 20
DEFAULT_GRID_HEIGHT = 20
# Number of random cells to fill on (re)population
DEFAULT_FILL = 200

# Editor layout (pixels)
CELL_SIZE = 20
# Gap between neighbouring cells
CELL_GAP = 2
GRID_MARGIN = 10
PANEL_WIDTH = 160
BUTTON_HEIGHT = 24
BUTTON_SPACING = 8
# The window never shrinks below a 20x20 grid
MIN_VISIBLE_CELLS = 20
FPS = 30
FONT_SIZE = 16
WINDOW_TITLE = "Grid Viewer"

# Colors
BACKGROUND_COLOR = (255, 255, 255)
EMPTY_COLOR = (255, 255, 255)
EMPTY_BORDER_COLOR = (200, 200, 200)
FULL_COLOR = (220, 40, 40)
START_COLOR = (40, 40, 220)
END_COLOR = (200, 0, 200)
WAYPOINT_COLOR = (240, 220, 0)
PATH_COLOR = (40, 180, 40)
BUTTON_COLOR = (225, 225, 225)
BUTTON_TEXT_COLOR = (20, 20, 20)
STATUS_COLORS = {
    "idle": (255, 255, 255),
    "success": (40, 180, 40),
    "failure": (220, 40, 40),
    "pending": (240, 220, 0),
}

# Logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL = logging.INFO
