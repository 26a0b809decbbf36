#!/usr/bin/env python3
"""
plot_utils.py

Utility functions for plotting the averages CSVs written by
batch_run.py using seaborn.

Typical workflow:

1) Run a size sweep:
       python batch_run.py -n laptop

2) Plot results:
   - From Python:
        from plot_utils import load_averages, plot_metrics_vs_size

        df = load_averages("data", marker="laptop")
        plot_metrics_vs_size(
            df,
            metrics=["Time [ms]", "VisitedPercentage [%]"],
            output_dir="data/plots",
            show=False,
        )

   - Or from the command line (using defaults at the bottom):
        python plot_utils.py

Defaults are configured via the DEFAULT_* constants at the bottom.
"""

from pathlib import Path
import re
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd
import matplotlib.pyplot as plt

import seaborn as sns


PathLike = Union[str, Path]

# averages{rows}x{cols}x{numTests}[x{marker}].csv
AVERAGES_PATTERN = re.compile(r"^averages(\d+)x(\d+)x(\d+)(?:x(.+))?\.csv$")


def parse_averages_name(name: str) -> Optional[Dict[str, object]]:
    """Split an averages file name into rows/cols/num_tests/marker, or None."""
    m = AVERAGES_PATTERN.match(name)
    if m is None:
        return None
    rows, cols, num_tests, marker = m.groups()
    return {
        "rows": int(rows),
        "cols": int(cols),
        "num_tests": int(num_tests),
        "marker": marker or "",
    }


def load_averages(csv_dir: PathLike, marker: Optional[str] = None) -> pd.DataFrame:
    """
    Read every averages CSV in csv_dir into one DataFrame.

    Adds columns rows, cols, num_tests, marker and Size (= rows * cols
    cells). If marker is given, only files with that marker are used
    ("" selects files without a marker).
    """
    csv_dir = Path(csv_dir)
    if not csv_dir.is_dir():
        raise FileNotFoundError(f"CSV directory not found: {csv_dir}")

    frames: List[pd.DataFrame] = []
    for path in sorted(csv_dir.glob("averages*.csv")):
        info = parse_averages_name(path.name)
        if info is None:
            continue
        if marker is not None and info["marker"] != marker:
            continue
        df = pd.read_csv(path)
        for key, value in info.items():
            df[key] = value
        frames.append(df)

    if not frames:
        raise FileNotFoundError(f"No averages CSV files found in {csv_dir}")

    df = pd.concat(frames, ignore_index=True)
    df["Size"] = df["rows"] * df["cols"]
    # pandas parses "true"/"false" as bool already; normalise labels for legends
    df["SinglePath"] = df["SinglePath"].map(
        lambda v: "single path" if str(v).lower() == "true" else "multiple paths"
    )
    return df


def plot_metrics_vs_size(
    df: pd.DataFrame,
    metrics: Sequence[str],
    output_dir: Optional[PathLike] = None,
    show: bool = True,
    seaborn_style: str = "whitegrid",
    palette_name: str = "colorblind",
    title_template: Optional[str] = None,
    log_scale: bool = False,
) -> List[Path]:
    """
    One line plot per metric: metric vs maze size, one line per
    algorithm, solid for single-path and dashed for multi-path mazes.

    Parameters
    ----------
    df : pandas.DataFrame
        Output of load_averages().
    metrics : list[str]
        CSV columns to plot, e.g. ["Time [ms]", "PathLength"].
    output_dir : str or Path or None, default None
        If provided, plots are saved as PDF files in that directory.
    show : bool, default True
        If True, show plots interactively via plt.show().
    title_template : str or None, default None
        If None: title is "{metric} vs maze size".
        Otherwise used as title_template.format(metric=metric).
    log_scale : bool, default False
        Log scale on the y-axis (useful for runtimes).

    Returns the list of saved files (empty when output_dir is None).
    """
    TITLE_FONTSIZE = 18
    AXIS_LABEL_FONTSIZE = 16
    LEGEND_FONTSIZE = 11

    metrics = list(metrics)
    for m in metrics:
        if m not in df.columns:
            raise ValueError(
                f"metric column '{m}' not found. "
                f"Available columns include: {list(df.columns)[:20]} ..."
            )

    if output_dir is not None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    sns.set_style(seaborn_style)
    sns.set_context("paper", font_scale=1.2)

    # fixed order of algorithms for stable colors
    algorithms = list(dict.fromkeys(df["Algorithm"]))
    palette = dict(zip(algorithms, sns.color_palette(palette_name, n_colors=len(algorithms))))

    saved: List[Path] = []
    for metric in metrics:
        sub = df[["Size", "Algorithm", "SinglePath", metric]].dropna()
        if sub.empty:
            print(f"[WARN] No data for metric '{metric}' after dropping NaNs. Skipping.")
            continue

        fig, ax = plt.subplots(figsize=(9, 6))
        sns.lineplot(
            data=sub.sort_values("Size"),
            x="Size",
            y=metric,
            hue="Algorithm",
            hue_order=algorithms,
            style="SinglePath",
            palette=palette,
            markers=True,
            ax=ax,
        )

        if title_template is None:
            title_text = f"{metric} vs maze size"
        else:
            title_text = title_template.format(metric=metric)
        ax.set_title(title_text, fontsize=TITLE_FONTSIZE)
        ax.set_xlabel("Maze size [cells]", fontsize=AXIS_LABEL_FONTSIZE)
        ax.set_ylabel(metric, fontsize=AXIS_LABEL_FONTSIZE)
        if log_scale:
            ax.set_yscale("log")
        ax.legend(fontsize=LEGEND_FONTSIZE, frameon=False)

        fig.tight_layout()

        if output_dir is not None:
            safe_metric = re.sub(r"[^A-Za-z0-9]+", "_", metric).strip("_")
            fname = output_dir / f"line_{safe_metric}_vs_size.pdf"
            fig.savefig(fname, dpi=150, bbox_inches="tight")
            saved.append(fname)
            print(f"Saved plot for '{metric}' to {fname}")

        if show:
            plt.show()
        else:
            plt.close(fig)

    return saved


# ---------------------------------------------------------------------
# Default behavior when running this file directly
# ---------------------------------------------------------------------
DEFAULT_CSV_DIR = "data"
DEFAULT_MARKER: Optional[str] = None  # None = use every averages file
DEFAULT_METRICS = [
    "Time [ms]",
    "VisitedPercentage [%]",
    "PathLength",
    "MemoryUsed [MB]",
]
DEFAULT_OUTPUT_DIR = "data/plots"
DEFAULT_SHOW = False  # set to True for interactive windows


def _run_with_defaults() -> None:
    """
    Helper used when running this module as a script.
    Uses the DEFAULT_* constants defined above.
    """
    print(f"Reading CSVs from: {DEFAULT_CSV_DIR} (marker={DEFAULT_MARKER!r})")
    print(f"Metrics: {DEFAULT_METRICS}")
    print(f"Output dir: {DEFAULT_OUTPUT_DIR!r}, show={DEFAULT_SHOW}")

    df = load_averages(DEFAULT_CSV_DIR, marker=DEFAULT_MARKER)
    plot_metrics_vs_size(
        df,
        metrics=DEFAULT_METRICS,
        output_dir=DEFAULT_OUTPUT_DIR,
        show=DEFAULT_SHOW,
        title_template="Pathfinding: {metric}",
    )


if __name__ == "__main__":
    _run_with_defaults()
