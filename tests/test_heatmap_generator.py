# tests/test_heatmap_generator.py

from __future__ import annotations

from datetime import date
from pathlib import Path

import numpy as np

from heatmap_generator import (
    DONE_COLOR,
    EMPTY_ALPHA,
    EMPTY_COLOR,
    PARTIAL_COLOR,
    DayStat,
    cell_box,
    cell_color,
    completion_rate,
    month_stats,
    rate_grid,
    render_heatmap,
)
from storage import Task, TaskStore

JUNE_1 = date(2024, 6, 1)


def _center(box: tuple[int, int, int, int]) -> tuple[int, int]:
    x0, y0, x1, y1 = box
    return ((x0 + x1) // 2, (y0 + y1) // 2)


def test_completion_rate() -> None:
    assert completion_rate([]) == 0.0
    assert completion_rate([Task("a", "a"), Task("b", "b", is_done=True)]) == 0.5
    assert completion_rate([Task("a", "a", is_done=True)]) == 1.0


def test_month_stats_covers_whole_month(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.json")
    store.add_task("one", date(2024, 6, 3))
    store.add_task("two", date(2024, 6, 3))
    store.add_task("done", date(2024, 6, 30))
    store.add_task("other month", date(2024, 7, 1))
    store.toggle_task(store.tasks_for_day(date(2024, 6, 3))[0].id, date(2024, 6, 3))
    store.toggle_task(store.tasks_for_day(date(2024, 6, 30))[0].id, date(2024, 6, 30))

    stats = month_stats(store, date(2024, 6, 17))

    assert len(stats) == 30
    assert stats[0].day == JUNE_1
    assert stats[-1].day == date(2024, 6, 30)
    assert stats[2].rate == 0.5
    assert stats[-1].rate == 1.0
    assert sum(s.rate for s in stats) == 1.5


def test_month_stats_leap_february(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.json")
    assert len(month_stats(store, date(2024, 2, 10))) == 29
    assert len(month_stats(store, date(2023, 2, 10))) == 28


def test_rate_grid_pads_with_nan() -> None:
    stats = [DayStat(day=date(2024, 6, d), rate=0.0) for d in range(1, 31)]
    grid = rate_grid(stats)

    assert grid.shape == (5, 7)
    assert np.isnan(grid).sum() == 5
    assert not np.isnan(grid.flat[29])


def test_render_heatmap_colors(tmp_path: Path) -> None:
    stats = [DayStat(day=date(2024, 6, d), rate=0.0) for d in range(1, 31)]
    stats[0] = DayStat(day=JUNE_1, rate=1.0)
    stats[1] = DayStat(day=date(2024, 6, 2), rate=0.25)

    img = render_heatmap(stats, cell_size=20, gap=4)

    assert img.mode == "RGBA"
    assert img.size == (7 * 20 + 6 * 4, 5 * 20 + 4 * 4)
    assert img.getpixel(_center(cell_box(0, 20, 4))) == (*DONE_COLOR, 255)
    assert img.getpixel(_center(cell_box(1, 20, 4))) == (*PARTIAL_COLOR, 255)
    assert img.getpixel(_center(cell_box(2, 20, 4))) == (*EMPTY_COLOR, EMPTY_ALPHA)
    # past the last day of the month
    assert img.getpixel(_center(cell_box(34, 20, 4))) == (0, 0, 0, 0)


def test_render_heatmap_outlines_today() -> None:
    stats = [DayStat(day=date(2024, 6, d), rate=0.0) for d in range(1, 31)]
    today = date(2024, 6, 10)
    outline = (1, 2, 3)

    img = render_heatmap(stats, today=today, cell_size=20, gap=4, outline_color=outline)

    x0, y0, x1, y1 = cell_box(9, 20, 4)
    assert img.getpixel((x0, (y0 + y1) // 2)) == (*outline, 255)

    x0, y0, x1, y1 = cell_box(8, 20, 4)
    assert img.getpixel((x0, (y0 + y1) // 2)) != (*outline, 255)


def test_empty_day_is_barely_visible() -> None:
    r, g, b, a = cell_color(0.0)
    assert (r, g, b) == EMPTY_COLOR
    assert a == int(255 * 0.3 * 0.15)
    assert cell_color(0.5)[3] == cell_color(1.0)[3] == 255
