# --- Configuration ---
MAZE_SIZE = 29  # Must be odd so the 2-step carving lattice leaves a wall border
MIN_MAZE_SIZE = 5
TICK_MS = 40    # Delay between simulation ticks
CELL_SIZE = 16  # GUI

START_POS = (1, 1)

# --- Color Scheme ---
BG_COLOR = "#0f172a"
PANEL_COLOR = "#1e293b"
TEXT_COLOR = "#f1f5f9"
MUTED_TEXT_COLOR = "#94a3b8"
WALL_COLOR = "#1e293b"
START_COLOR = "#22c55e"
GOAL_COLOR = "#dc2626"
DEFAULT_CELL_COLOR = "#020617"
FINAL_PATH_COLOR = "#ffffff"

# Classic computer: amber
CLASSIC_VISITED_COLOR = "#5c4a1c"
CLASSIC_FRONTIER_COLOR = "#f59e0b"

# Quantum computer: cyan
QUANTUM_VISITED_COLOR = "#164e5c"
QUANTUM_FRONTIER_COLOR = "#22d3ee"
