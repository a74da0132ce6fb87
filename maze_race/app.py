import argparse
import logging
import random
import tkinter as tk
from tkinter import ttk

from maze_race.config import (
    BG_COLOR,
    CELL_SIZE,
    CLASSIC_FRONTIER_COLOR,
    MAZE_SIZE,
    MUTED_TEXT_COLOR,
    PANEL_COLOR,
    QUANTUM_FRONTIER_COLOR,
    TEXT_COLOR,
    TICK_MS,
)
from maze_race.maze import odd_size
from maze_race.palette import THEMES, grid_colors
from maze_race.simulation import Simulation
from maze_race.solvers import CLASSIC, QUANTUM

logger = logging.getLogger(__name__)

TITLES = {
    CLASSIC: "Classic Computer (sequential)",
    QUANTUM: "Quantum Computer (parallel)",
}
BLURBS = {
    CLASSIC: "Tries paths one at a time and backtracks at dead ends.",
    QUANTUM: "Expands every route at once as a wave; reaches the exit in minimum time.",
}
ACCENTS = {CLASSIC: CLASSIC_FRONTIER_COLOR, QUANTUM: QUANTUM_FRONTIER_COLOR}


class MazeRaceApp:
    """
    Tkinter front end for the classic vs quantum race.

    Layout:
      - Control row: Start/Resume/Pause toggle and New Maze
      - Two canvases side by side, one per solver, colored from that
        solver's snapshot (path > frontier > visited)
      - Stats panel under each canvas: iterations, explored cells, path length

    The Simulation object holds all race state; this class only forwards
    button presses to it, schedules tick() with root.after() and redraws.
    """
    def __init__(self, root, size=MAZE_SIZE, rng=None):
        self.root = root
        self.root.title("Classic vs Quantum Maze Search")
        self.root.configure(bg=BG_COLOR)
        self.root.resizable(False, False)

        self.sim = Simulation(size=size, rng=rng)
        self._after_id = None
        self.cell_ids = {CLASSIC: [], QUANTUM: []}

        self.run_label = tk.StringVar(value="Start Simulation")
        self.stats_vars = {
            name: {"steps": tk.StringVar(), "explored": tk.StringVar(), "path": tk.StringVar()}
            for name in (CLASSIC, QUANTUM)
        }
        self.banner_var = tk.StringVar(value="")

        self._setup_ui()
        self._build_cells()
        self.draw_all()

    def _setup_ui(self):
        style = ttk.Style()
        style.configure("TButton", padding=6, relief="flat", background="#34495e", foreground="white")
        style.map("TButton", background=[('active', '#4a627a')])

        header = tk.Frame(self.root, bg=BG_COLOR, padx=10, pady=10)
        header.pack(side=tk.TOP, fill=tk.X)
        tk.Label(header, text="Classic vs Quantum", bg=BG_COLOR, fg=TEXT_COLOR,
                 font=("Helvetica", 22, "bold")).pack()
        tk.Label(header, text="Sequential depth-first search against a breadth-first wavefront.",
                 bg=BG_COLOR, fg=MUTED_TEXT_COLOR).pack()

        control_frame = tk.Frame(self.root, bg=BG_COLOR, padx=10, pady=5)
        control_frame.pack(side=tk.TOP)
        ttk.Button(control_frame, textvariable=self.run_label, command=self.toggle_run).pack(side=tk.LEFT, padx=5)
        ttk.Button(control_frame, text="New Maze", command=self.new_maze).pack(side=tk.LEFT, padx=5)

        maze_frame = tk.Frame(self.root, bg=BG_COLOR, padx=10, pady=10)
        maze_frame.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        self.canvases = {}
        for name, side in ((CLASSIC, tk.LEFT), (QUANTUM, tk.RIGHT)):
            column = tk.Frame(maze_frame, bg=BG_COLOR)
            column.pack(side=side, padx=10)
            tk.Label(column, text=TITLES[name], bg=BG_COLOR, fg=ACCENTS[name],
                     font=("Helvetica", 14, "bold")).pack(pady=(0, 6))
            canvas = tk.Canvas(column, bg=PANEL_COLOR, highlightthickness=2,
                               highlightbackground=ACCENTS[name])
            canvas.pack()
            self.canvases[name] = canvas
            self._build_stats_panel(column, name)

        tk.Label(self.root, textvariable=self.banner_var, bg=BG_COLOR, fg=TEXT_COLOR,
                 font=("Helvetica", 14, "bold"), pady=8).pack(side=tk.TOP)

    def _build_stats_panel(self, parent, name):
        panel = tk.Frame(parent, bg=PANEL_COLOR, padx=10, pady=8)
        panel.pack(fill=tk.X, pady=(8, 0))
        for col, (key, caption) in enumerate((("steps", "Iterations"), ("explored", "Explored cells"), ("path", "Path length"))):
            tk.Label(panel, text=caption, bg=PANEL_COLOR, fg=MUTED_TEXT_COLOR).grid(row=0, column=col, padx=8, sticky=tk.W)
            tk.Label(panel, textvariable=self.stats_vars[name][key], bg=PANEL_COLOR, fg=ACCENTS[name],
                     font=("Courier", 16, "bold")).grid(row=1, column=col, padx=8, sticky=tk.W)
        tk.Label(panel, text=BLURBS[name], bg=PANEL_COLOR, fg=MUTED_TEXT_COLOR,
                 font=("Helvetica", 9, "italic")).grid(row=2, column=0, columnspan=3, sticky=tk.W, pady=(6, 0))

    def _build_cells(self):
        """Creates one rectangle per cell once per maze; ticks only recolor them."""
        maze = self.sim.maze
        for name, canvas in self.canvases.items():
            canvas.delete("all")
            canvas.configure(width=maze.width * CELL_SIZE, height=maze.height * CELL_SIZE)
            ids = []
            for y in range(maze.height):
                row = []
                for x in range(maze.width):
                    x1, y1 = x * CELL_SIZE, y * CELL_SIZE
                    row.append(canvas.create_rectangle(x1 + 1, y1 + 1, x1 + CELL_SIZE, y1 + CELL_SIZE, outline=""))
                ids.append(row)
            self.cell_ids[name] = ids

    # --- Commands ---
    def toggle_run(self):
        if self.sim.is_running:
            self.sim.pause()
            self._cancel_loop()
        elif self.sim.start():
            self._schedule()
        self._update_controls()

    def new_maze(self):
        self._cancel_loop()
        self.sim.reset()
        self.banner_var.set("")
        self._build_cells()
        self.draw_all()
        self._update_controls()

    def _update_controls(self):
        if self.sim.is_running:
            self.run_label.set("Pause")
        elif self.sim.is_paused:
            self.run_label.set("Resume")
        else:
            self.run_label.set("Start Simulation")

    # --- Simulation loop ---
    def _schedule(self):
        self._after_id = self.root.after(self.sim.tick_ms, self.update_loop)

    def _cancel_loop(self):
        if self._after_id is not None:
            self.root.after_cancel(self._after_id)
            self._after_id = None

    def update_loop(self):
        self._after_id = None
        if not self.sim.is_running:
            return
        self.sim.tick()
        self.draw_all()
        if self.sim.is_finished:
            self.draw_winner_message()
            self._update_controls()
            return
        self._schedule()

    # --- Drawing ---
    def draw_all(self):
        for snapshot in self.sim.snapshots():
            self._draw_solver(snapshot)
            self._update_stats(snapshot)

    def _draw_solver(self, snapshot):
        canvas = self.canvases[snapshot.name]
        ids = self.cell_ids[snapshot.name]
        colors = grid_colors(self.sim.maze, snapshot, THEMES[snapshot.name])
        for y, row in enumerate(colors):
            for x, color in enumerate(row):
                canvas.itemconfigure(ids[y][x], fill=color)

    def _update_stats(self, snapshot):
        stats = self.stats_vars[snapshot.name]
        stats["steps"].set(str(snapshot.steps))
        stats["explored"].set(str(len(snapshot.visited)))
        stats["path"].set(str(max(0, len(snapshot.path) - 1)) if snapshot.path else "-")

    def draw_winner_message(self):
        winner = self.sim.winner()
        classic, quantum = self.sim.snapshots()
        if winner == 'Tie':
            message = f"Tie: both needed {classic.steps} iterations"
        else:
            message = (f"{winner} finished in fewer iterations "
                       f"(classic {classic.steps}, quantum {quantum.steps})")
        self.banner_var.set(message)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Animate a classic vs quantum maze search race.")
    parser.add_argument("--size", type=odd_size, default=MAZE_SIZE, help="Odd maze dimension >= 5")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible mazes")
    parser.add_argument("--tick-ms", type=int, default=TICK_MS)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = tk.Tk()
    app = MazeRaceApp(root, size=args.size, rng=random.Random(args.seed))
    app.sim.tick_ms = args.tick_ms
    root.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
