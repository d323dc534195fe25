"""
Task storage - day-keyed task buckets persisted to a JSON file
"""
import json
import logging
import os
import tempfile
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

MAX_TASKS_PER_DAY = 7

DayLike = Union[date, datetime]


@dataclass(frozen=True)
class Task:
    """A single task. The owning day is the bucket key it is filed under."""
    id: str
    title: str
    is_done: bool = False


def _generate_id() -> str:
    """Generate unique task ID"""
    return str(uuid.uuid4())


def normalize_day(day: DayLike) -> date:
    """Truncate a date or datetime to its calendar day"""
    if isinstance(day, datetime):
        return day.date()
    if isinstance(day, date):
        return day
    raise TypeError(f"expected date or datetime, got {type(day).__name__}")


def format_day_key(day: date) -> str:
    """ISO-8601 midnight timestamp used as the document key, e.g. 2024-06-01T00:00:00Z"""
    return f"{day.isoformat()}T00:00:00Z"


def parse_day_key(raw: str) -> date:
    """
    Parse a document key back into a calendar day.

    Accepts a plain date ("2024-06-01") or any ISO-8601 timestamp; the
    date is taken as written, without converting between time zones.
    """
    if not isinstance(raw, str):
        raise TypeError(f"day key must be a string, got {type(raw).__name__}")
    text = raw.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date()


def write_json_atomic(path: Path, data) -> None:
    """
    Write JSON to path via a temp file in the same directory and os.replace.

    Raises OSError/TypeError on failure; the existing file is left intact.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.remove(tmp_name)
        except OSError:
            pass
        raise


def _task_from_dict(item) -> Task:
    if not isinstance(item, dict):
        raise TypeError("task entry must be an object")

    task_id = item["id"]
    title = item["title"]
    is_done = item.get("isDone", False)

    if not isinstance(task_id, str) or not task_id:
        raise ValueError("task id must be a non-empty string")
    if not isinstance(title, str) or not title.strip():
        raise ValueError("task title must be non-empty text")
    if not isinstance(is_done, bool):
        raise ValueError("task isDone must be a boolean")

    return Task(id=task_id, title=title, is_done=is_done)


def _task_to_dict(task: Task, day_key: str) -> Dict:
    return {
        "id": task.id,
        "title": task.title,
        "isDone": task.is_done,
        "day": day_key,
    }


class TaskStore:
    """
    Owns the mapping from calendar day to its ordered task bucket.

    Every successful add/toggle/delete rewrites the whole file. Nothing here
    raises on bad input or I/O trouble: rejected calls are no-ops, a bad file
    loads as empty, and a failed write is recorded in ``last_error``.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.last_error: Optional[Exception] = None
        self._tasks: Dict[date, List[Task]] = {}
        self.load()

    # ---- reads ----

    def tasks_for_day(self, day: DayLike) -> List[Task]:
        """Tasks filed under the given day, in display order"""
        return list(self._tasks.get(normalize_day(day), []))

    def can_add(self, day: DayLike) -> bool:
        return len(self._tasks.get(normalize_day(day), [])) < MAX_TASKS_PER_DAY

    def days(self) -> List[date]:
        """Days that currently hold at least one task, oldest first"""
        return sorted(self._tasks)

    def to_document(self) -> Dict[str, List[Dict]]:
        """JSON-ready form of the whole store, as written by save()"""
        document = {}
        for day in sorted(self._tasks):
            key = format_day_key(day)
            document[key] = [_task_to_dict(t, key) for t in self._tasks[day]]
        return document

    # ---- mutations ----

    def add_task(self, text: str, day: DayLike) -> None:
        """
        Append a new task to the day's bucket.

        Whitespace-only text and full days are ignored.
        """
        title = (text or "").strip()
        if not title:
            return

        key = normalize_day(day)
        bucket = self._tasks.get(key, [])
        if len(bucket) >= MAX_TASKS_PER_DAY:
            logger.debug("Day %s is full, ignoring new task", key)
            return

        task = Task(id=_generate_id(), title=title)
        self._tasks[key] = bucket + [task]
        logger.debug("Task added id=%s day=%s", task.id, key)
        self.save()

    def toggle_task(self, task_id: str, day: DayLike) -> None:
        """Flip is_done of the task with this id in the day's bucket"""
        key = normalize_day(day)
        index = self._find(key, task_id)
        if index is None:
            return

        bucket = self._tasks[key]
        bucket[index] = replace(bucket[index], is_done=not bucket[index].is_done)
        self.save()

    def delete_task(self, task_id: str, day: DayLike) -> None:
        """Remove the task with this id from the day's bucket"""
        key = normalize_day(day)
        index = self._find(key, task_id)
        if index is None:
            return

        bucket = self._tasks[key]
        del bucket[index]
        if not bucket:
            del self._tasks[key]
        logger.debug("Task deleted id=%s day=%s", task_id, key)
        self.save()

    def _find(self, key: date, task_id: str) -> Optional[int]:
        for i, task in enumerate(self._tasks.get(key, [])):
            if task.id == task_id:
                return i
        return None

    # ---- persistence ----

    def load(self) -> None:
        """Replace in-memory state with the file contents, or empty on any failure"""
        self._tasks = {}

        if not self.path.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._tasks = self._parse_document(data)
        except (OSError, ValueError, TypeError, KeyError, RecursionError) as e:
            logger.warning("Could not load tasks from %s (%s), starting empty", self.path, e)
            self._tasks = {}
            return

        logger.info("Loaded %d task(s) across %d day(s) from %s",
                    sum(len(b) for b in self._tasks.values()), len(self._tasks), self.path)

    @staticmethod
    def _parse_document(data) -> Dict[date, List[Task]]:
        if not isinstance(data, dict):
            raise TypeError("task document must be an object")

        result: Dict[date, List[Task]] = {}
        for raw_key, items in data.items():
            day = parse_day_key(raw_key)
            if not isinstance(items, list):
                raise TypeError(f"tasks for {raw_key} must be a list")

            bucket = result.setdefault(day, [])
            for item in items:
                bucket.append(_task_from_dict(item))

        for day, bucket in list(result.items()):
            if not bucket:
                del result[day]
            elif len(bucket) > MAX_TASKS_PER_DAY:
                logger.warning("Day %s holds %d tasks on disk, keeping the first %d",
                               day, len(bucket), MAX_TASKS_PER_DAY)
                result[day] = bucket[:MAX_TASKS_PER_DAY]

        return result

    def save(self) -> bool:
        """
        Write the whole store to disk.

        Returns:
            True on success. On failure the error is kept in last_error and
            the in-memory state remains authoritative.
        """
        try:
            write_json_atomic(self.path, self.to_document())
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Failed to save tasks to %s", self.path)
            self.last_error = e
            return False

        self.last_error = None
        return True
