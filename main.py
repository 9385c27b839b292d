import sys
import logging

import numpy as np

from gridpath.config import (
    DEFAULT_FILL,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    LOG_FORMAT,
    LOG_LEVEL,
)
from gridpath.editor import Editor
from gridpath.grid import Grid, Square


def main():
    logging.basicConfig(format=LOG_FORMAT, level=LOG_LEVEL)
    rng = np.random.default_rng()
    # Optional grid file as the first argument, else a random grid
    if len(sys.argv) > 1:
        grid = Grid.load(sys.argv[1])
    else:
        grid = Grid(DEFAULT_GRID_WIDTH, DEFAULT_GRID_HEIGHT)
        grid.populate(DEFAULT_FILL, rng)
    editor = Editor(grid, rng=rng)
    # Keep the default start and end cells open
    for p in editor.state.waypoints:
        grid.set_square(p, Square.EMPTY)
    editor.run()


if __name__ == "__main__":
    main()
