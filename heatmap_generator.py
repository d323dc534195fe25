"""
Heatmap Generator - monthly completion history rendered as a grid image
"""
import calendar
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from storage import Task, TaskStore

COLUMNS = 7

# Cell colors (RGB)
DONE_COLOR = (52, 199, 89)
PARTIAL_COLOR = (255, 149, 0)
EMPTY_COLOR = (142, 142, 147)
OUTLINE_COLOR = (60, 60, 67)

EMPTY_ALPHA = int(255 * 0.3 * 0.15)


@dataclass(frozen=True)
class DayStat:
    day: date
    rate: float


def completion_rate(tasks: Sequence[Task]) -> float:
    """Fraction of tasks marked done, 0.0 for a day without tasks"""
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.is_done)
    return done / len(tasks)


def month_stats(store: TaskStore, today: date) -> List[DayStat]:
    """One DayStat per day of today's month, first to last"""
    _, days_in_month = calendar.monthrange(today.year, today.month)
    stats = []
    for day_num in range(1, days_in_month + 1):
        day = date(today.year, today.month, day_num)
        stats.append(DayStat(day=day, rate=completion_rate(store.tasks_for_day(day))))
    return stats


def rate_grid(stats: Sequence[DayStat], columns: int = COLUMNS) -> np.ndarray:
    """
    Lay the rates out row by row; cells past the last day are NaN.

    Returns:
        Array of shape (rows, columns)
    """
    rates = np.array([s.rate for s in stats], dtype=float)
    rows = max(1, -(-len(rates) // columns))
    grid = np.full(rows * columns, np.nan)
    grid[:len(rates)] = rates
    return grid.reshape(rows, columns)


def cell_color(rate: float) -> Tuple[int, int, int, int]:
    """RGBA fill for a completion rate"""
    if rate >= 1.0:
        return (*DONE_COLOR, 255)
    if rate > 0.0:
        return (*PARTIAL_COLOR, 255)
    return (*EMPTY_COLOR, EMPTY_ALPHA)


def cell_box(index: int, cell_size: int, gap: int, columns: int = COLUMNS) -> Tuple[int, int, int, int]:
    """Pixel box (x0, y0, x1, y1) of the cell at a flat index"""
    row, col = divmod(index, columns)
    x0 = col * (cell_size + gap)
    y0 = row * (cell_size + gap)
    return (x0, y0, x0 + cell_size - 1, y0 + cell_size - 1)


def render_heatmap(stats: Sequence[DayStat], today: Optional[date] = None,
                   cell_size: int = 34, gap: int = 4, radius: int = 3,
                   outline_color: Tuple[int, int, int] = OUTLINE_COLOR) -> Image.Image:
    """
    Render the completion grid as a transparent RGBA image.

    Cells flow left to right from the first stat. Today's cell, if present,
    gets an outline.
    """
    grid = rate_grid(stats)
    rows, columns = grid.shape
    width = columns * cell_size + (columns - 1) * gap
    height = rows * cell_size + (rows - 1) * gap

    img = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    for index, rate in enumerate(grid.flat):
        if np.isnan(rate):
            continue
        box = cell_box(index, cell_size, gap, columns)
        draw.rounded_rectangle(box, radius=radius, fill=cell_color(float(rate)))

        if today is not None and stats[index].day == today:
            draw.rounded_rectangle(box, radius=radius, outline=(*outline_color, 255), width=2)

    return img
