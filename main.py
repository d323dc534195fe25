"""
Verto - Main Entry Point

A small daily task tracker: up to seven tasks a day, a monthly completion
heatmap and an accent theme picker. Tasks live in tasks.json in the
per-user application data directory.

Usage:
    python main.py
"""
import logging
import sys
from pathlib import Path

# Ensure we're in the right directory for imports
sys.path.insert(0, str(Path(__file__).parent))

from config import LOG_DIR, TASKS_FILE
from logging_setup import setup_logging
from storage import TaskStore
from gui.app import run_app

logger = logging.getLogger(__name__)


def main():
    setup_logging(LOG_DIR)
    logger.info("Starting Verto, data file %s", TASKS_FILE)

    store = TaskStore(TASKS_FILE)
    run_app(store)


if __name__ == "__main__":
    main()
