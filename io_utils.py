# io_utils.py
from dataclasses import asdict
from pathlib import Path
from datetime import datetime
import csv
import json
from typing import Any, Dict, Sequence
from config import Config
import uuid

CSV_HEADER = [
    "Algorithm",
    "SinglePath",
    "Time [ms]",
    "VisitedNodes",
    "VisitedPercentage [%]",
    "PathLength",
    "MemoryUsed [MB]",
]

Averages = Dict[str, Dict[str, float]]


def averages_filename(
    rows: int,
    cols: int,
    num_tests: int,
    marker: str = "",
    out_dir: str | Path = "data",
) -> Path:
    """
    Path of the averages CSV for one maze size.

    Example:
        data/averages50x50x10.csv
        data/averages50x50x10xlaptop.csv   (marker="laptop")
    """
    name = f"averages{rows}x{cols}x{num_tests}"
    if marker:
        name += f"x{marker}"
    return Path(out_dir) / f"{name}.csv"


def _format_row(algorithm: str, single_path: bool, m: Dict[str, float]) -> list:
    return [
        algorithm,
        "true" if single_path else "false",
        f"{m['time'] / 1e6:.3f}",  # ns -> ms
        f"{m['visitedNodes']:.0f}",
        f"{m['visitedPercentage']:.2f}",
        f"{m['pathLength']:.0f}",
        f"{m['memoryUsed']:.2f}",
    ]


def write_averages_csv(
    path: str | Path,
    averages_single: Averages,
    averages_multi: Averages,
    algorithm_order: Sequence[str],
) -> Path:
    """
    Write averaged metrics for one maze size.

    Parameters
    ----------
    path : str | Path
        Output CSV; parent directories are created.
    averages_single, averages_multi : dict
        Output of metrics.calculate_averages() for the single-path and
        multi-path runs respectively.
    algorithm_order : sequence of str
        Row order inside each block. Algorithms missing from a block
        (no successful run) are skipped.

    The single-path block comes first, then the multi-path block.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for single_path, averages in ((True, averages_single), (False, averages_multi)):
            for algorithm in algorithm_order:
                if algorithm in averages:
                    writer.writerow(_format_row(algorithm, single_path, averages[algorithm]))
    return path


def make_run_dir(cfg: Config, base: str = "outputs") -> Path:
    """
    Create (if needed) and return a unique directory for this run.

    Folder naming
    -------------
    The folder name encodes:
      - grid size (rows x cols)
      - maze mode (SP = single path, MP = multiple paths)
      - random seed
      - a timestamp + short UUID suffix to guarantee uniqueness

    Example:
        outputs/run_R25x25_SP_seed1_20251216-213012-ab12cd34/
    """
    base_path = Path(base)
    base_path.mkdir(parents=True, exist_ok=True)

    parts = [
        f"R{cfg.rows}x{cfg.cols}",
        "SP" if cfg.single_path else "MP",
        f"seed{cfg.seed}",
    ]
    base_name = "run_" + "_".join(parts)

    # repeated runs with the same config must not overwrite each other
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    uid = uuid.uuid4().hex[:8]
    run_dir = base_path / f"{base_name}_{ts}-{uid}"

    run_dir.mkdir(exist_ok=False)
    return run_dir


def save_config(cfg: Config, run_dir: Path, filename: str = "config.json") -> None:
    """Serialize the Config for this run into JSON, for reproducibility."""
    data: dict[str, Any] = asdict(cfg)
    out_path = run_dir / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def save_summary(summary: dict[str, Any], run_dir: Path, filename: str = "summary.json") -> None:
    """
    Save the summary metrics for a run as a JSON file.

    The structure is nested per algorithm ("bfs.path_length",
    "astar.time_ms", ...) so it loads directly into analysis notebooks.
    """
    out_path = run_dir / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)
