# Settings for grids, navigation and spatial queries

# World units per grid cell when a grid is created without a size.
DEFAULT_CELL_SIZE = 1.0

# Upper bound on cells a single BFS may expand before giving up.
# Grids are unbounded, so an enclosed goal would otherwise never terminate.
MAX_PATH_EXPANSIONS = 20_000

# Points held by a QuadTree node before it subdivides.
QUADTREE_CAPACITY = 4
