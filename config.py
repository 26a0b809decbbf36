# config.py
from dataclasses import dataclass

@dataclass
class Config:
    rows: int = 25
    cols: int = 25

    # True -> spanning-tree maze, False -> extra passages opened
    single_path: bool = True
    seed: int = 0

    # Fraction of spare connector walls opened in multi-path mode
    extra_passage_density: float = 0.1

    # "corners" or "farthest"
    endpoint_policy: str = "corners"

    # print per-algorithm progress lines
    log_events: bool = True

    # main.py only: build a GIF of each search
    animate: bool = False
    animation_fps: int = 20
