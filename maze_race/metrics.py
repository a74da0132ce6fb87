import argparse
import collections
import csv
import logging
import os
import random
import statistics
import time

import matplotlib.pyplot as plt

from maze_race.config import MAZE_SIZE
from maze_race.maze import odd_size
from maze_race.simulation import Simulation
from maze_race.tree_export import save_discovery_tree

logger = logging.getLogger(__name__)

METRICS = [
    "ticks",
    "elapsed_sec",
    "shortest_path",
    "classic_steps",
    "quantum_steps",
    "classic_explored",
    "quantum_explored",
    "classic_path_length",
    "quantum_path_length",
    "classic_frontier_max",
    "quantum_frontier_max",
]

# Pairs drawn side by side in the comparison chart
COMPARED = [
    ("steps", "classic_steps_avg", "quantum_steps_avg"),
    ("explored", "classic_explored_avg", "quantum_explored_avg"),
    ("path length", "classic_path_length_avg", "quantum_path_length_avg"),
    ("frontier max", "classic_frontier_max_avg", "quantum_frontier_max_avg"),
]


def baseline_distance(maze):
    """Shortest start -> goal distance in moves, by a plain BFS over the maze.

    Independent of the solvers; used as the reference the quantum step count
    should match. Returns None if the goal is unreachable.
    """
    distances = {maze.start: 0}
    queue = collections.deque([maze.start])
    while queue:
        current = queue.popleft()
        if current == maze.goal:
            return distances[current]
        for neighbor in maze.open_neighbors(*current):
            if neighbor not in distances:
                distances[neighbor] = distances[current] + 1
                queue.append(neighbor)
    return None


def run_single(size=MAZE_SIZE, seed=None, max_ticks=None, trees_dir=None):
    """Runs one full race headlessly and returns a flat result row.

    With `trees_dir` set, both solvers' discovery trees are also rendered
    there as classic_<seed>.svg and quantum_<seed>.svg.
    """
    rng = random.Random(seed)
    sim = Simulation(size=size, rng=rng)

    t0 = time.perf_counter()
    ticks = sim.run(max_ticks=max_ticks)
    elapsed = time.perf_counter() - t0

    if trees_dir is not None:
        os.makedirs(trees_dir, exist_ok=True)
        for solver in (sim.classic, sim.quantum):
            save_discovery_tree(solver, os.path.join(trees_dir, f"{solver.name.lower()}_{seed}"))

    classic, quantum = sim.snapshots()
    return {
        "size": size,
        "seed": seed,
        "ticks": ticks,
        "elapsed_sec": elapsed,
        "shortest_path": baseline_distance(sim.maze),
        "classic_steps": classic.steps,
        "quantum_steps": quantum.steps,
        "classic_explored": len(classic.visited),
        "quantum_explored": len(quantum.visited),
        # Path length in moves, not cells
        "classic_path_length": max(0, len(classic.path) - 1),
        "quantum_path_length": max(0, len(quantum.path) - 1),
        "classic_frontier_max": classic.frontier_max,
        "quantum_frontier_max": quantum.frontier_max,
        "finished": sim.is_finished,
        "winner": sim.winner(),
    }


def aggregate_results(rows, metrics=METRICS):
    def agg_stat(values):
        if not values:
            return {"avg": 0, "min": 0, "max": 0, "stdev": 0}
        return {
            "avg": statistics.mean(values),
            "min": min(values),
            "max": max(values),
            "stdev": statistics.pstdev(values) if len(values) > 1 else 0,
        }

    summary = {"count": len(rows)}
    for m in metrics:
        stats = agg_stat([r[m] for r in rows if r.get(m) is not None])
        for stat_name, value in stats.items():
            summary[f"{m}_{stat_name}"] = value
    summary["finished_rate"] = sum(1 for r in rows if r["finished"]) / len(rows) if rows else 0
    summary["quantum_fewer_steps_rate"] = (
        sum(1 for r in rows if r["quantum_steps"] < r["classic_steps"]) / len(rows) if rows else 0
    )
    return summary


def write_csv(path, rows):
    if not rows:
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        for r in rows:
            writer.writerow(r)


def plot_comparison(summary, out_path):
    """Grouped bar chart of classic vs quantum averages."""
    labels = [label for label, _, _ in COMPARED]
    classic_values = [summary.get(c, 0) for _, c, _ in COMPARED]
    quantum_values = [summary.get(q, 0) for _, _, q in COMPARED]
    positions = range(len(labels))
    width = 0.4

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar([p - width / 2 for p in positions], classic_values, width, label="Classic", color="#f59e0b")
    ax.bar([p + width / 2 for p in positions], quantum_values, width, label="Quantum", color="#22d3ee")
    ax.set_xticks(list(positions))
    ax.set_xticklabels(labels)
    ax.set_ylabel("average")
    ax.set_title(f"Classic vs Quantum over {summary.get('count', 0)} mazes")
    ax.legend()
    fig.tight_layout()
    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(out_path)
    plt.close(fig)


def plot_steps_per_run(rows, out_path):
    """Per-run step counts, with the BFS distance as reference line."""
    runs = range(1, len(rows) + 1)
    fig, ax = plt.subplots(figsize=(max(8, len(rows) * 0.3), 5))
    ax.plot(runs, [r["classic_steps"] for r in rows], marker="o", label="Classic", color="#f59e0b")
    ax.plot(runs, [r["quantum_steps"] for r in rows], marker="o", label="Quantum", color="#22d3ee")
    ax.plot(runs, [r["shortest_path"] for r in rows], linestyle="--", label="Shortest path", color="#64748b")
    ax.set_xlabel("run")
    ax.set_ylabel("steps")
    ax.legend()
    fig.tight_layout()
    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(out_path)
    plt.close(fig)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Race classic and quantum solvers over many mazes and plot metrics.")
    parser.add_argument("--gui", action="store_true", help="Open the interactive race instead of a headless run")
    parser.add_argument("--runs", type=int, default=20, help="Number of mazes to race")
    parser.add_argument("--size", type=odd_size, default=MAZE_SIZE)
    parser.add_argument("--seed", type=int, default=None, help="Base seed; run i uses seed + i")
    parser.add_argument("--out_dir", default="metrics_output")
    parser.add_argument("--no-plots", action="store_true", help="Only write CSVs")
    parser.add_argument("--trees", metavar="DIR", default=None,
                        help="Also render each run's discovery trees into DIR (needs graphviz)")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.gui:
        from maze_race import app
        gui_argv = ["--size", str(args.size), "--log-level", args.log_level]
        if args.seed is not None:
            gui_argv += ["--seed", str(args.seed)]
        return app.main(gui_argv)

    seed_base = args.seed if args.seed is not None else int(time.time())
    rows = []
    for i in range(args.runs):
        rows.append(run_single(size=args.size, seed=seed_base + i, trees_dir=args.trees))
        logger.debug("Run %d/%d done", i + 1, args.runs)

    os.makedirs(args.out_dir, exist_ok=True)
    write_csv(os.path.join(args.out_dir, "raw_results.csv"), rows)
    summary = aggregate_results(rows)
    write_csv(os.path.join(args.out_dir, "summary.csv"), [summary])

    if not args.no_plots:
        plot_comparison(summary, os.path.join(args.out_dir, "comparison.png"))
        plot_steps_per_run(rows, os.path.join(args.out_dir, "steps_per_run.png"))

    logger.info("Wrote results for %d runs to %s", len(rows), args.out_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
