import argparse
import logging
import multiprocessing as mp
import os
import time
from pathlib import Path

from buttonpress import SolverConfig, load_config, parse_machines, total_cost

# Limit threads per worker
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["OPENBLAS_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"

ROOT = Path(__file__).resolve().parents[1]

PARTS = {"1": "gf2", "2": "integer"}


def main():
    n_cpus = os.cpu_count() or 1
    default_workers = max(n_cpus - 1, 1)

    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="Puzzle input file")
    ap.add_argument(
        "--config",
        default=str(ROOT / "configs" / "default.yaml"),
    )
    ap.add_argument("--part", choices=["1", "2", "both"], default="both")
    ap.add_argument(
        "--workers",
        type=int,
        default=None,
        help=f"Number of workers (config value if omitted, e.g. {default_workers})",
    )
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    cfg = load_config(args.config) if args.config else SolverConfig()
    if args.workers is not None:
        cfg.workers = max(int(args.workers), 1)

    with open(args.input, "r", encoding="utf-8") as f:
        machines = parse_machines(f.read())

    parts = ["1", "2"] if args.part == "both" else [args.part]
    print(f"\nSolving {len(machines):,} machines with {cfg.workers} workers...\n")

    for part in parts:
        start_time = time.perf_counter()
        total = total_cost(machines, PARTS[part], cfg)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        print(f"Part {part} ({PARTS[part]}): {total}  [{elapsed_ms:.1f} ms]")


if __name__ == "__main__":
    mp.freeze_support()
    main()
