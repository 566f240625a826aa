"""Integration test fixtures for live draft generation.

These tests call the real OpenAI API and are skipped when ``OPENAI_API_KEY``
is not set.  Each run writes to tests_integration/logs/<timestamp>/:
  - run.log        full logging output (INFO+)
  - results.jsonl  one JSON object per generated draft with its issues

Run with:  pytest tests_integration/ -v
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path

import pytest
from dotenv import load_dotenv

from hzz_plan.schema.registry import SchemaRegistry, load_registry

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.resolve()
LOGS_DIR = Path(__file__).parent / "logs"

load_dotenv(PROJECT_ROOT / ".env")


def pytest_collection_modifyitems(config, items):  # pylint: disable=unused-argument
    """Skip every live test when no API key is configured."""
    if os.getenv("OPENAI_API_KEY"):
        return
    skip = pytest.mark.skip(reason="OPENAI_API_KEY not set")
    for item in items:
        item.add_marker(skip)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def run_log_dir():
    """Create a timestamped log directory for this test run and attach a file handler."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_dir = LOGS_DIR / timestamp
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "run.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.getLogger().addHandler(file_handler)

    logger.info("Integration test run started. Logs: %s", log_dir)
    yield log_dir

    logging.getLogger().removeHandler(file_handler)
    file_handler.close()


@pytest.fixture(scope="session")
def results_writer(run_log_dir):  # pylint: disable=redefined-outer-name
    """Provide a callable that appends a result record to results.jsonl."""
    results_path = run_log_dir / "results.jsonl"

    def _write(record: dict):
        with open(results_path, "a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")

    return _write


@pytest.fixture(scope="session")
def live_registry(run_log_dir) -> SchemaRegistry:  # pylint: disable=redefined-outer-name,unused-argument
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return load_registry()
