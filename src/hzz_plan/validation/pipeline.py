"""Pipeline entry point: sanitize one raw LLM document against the field catalog.

``run`` is the single seam the web handlers and the CLI depend on.  It never
raises on bad input; failure is reported through ``ValidationResult.issues``
and ``ValidationResult.success``.

Usage:
    python -m hzz_plan.validation.pipeline raw_sections.json
    python -m hzz_plan.validation.pipeline raw_sections.json --schema my_catalog.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from hzz_plan.config import LOG_LEVEL
from hzz_plan.schema.registry import SchemaRegistry, load_registry, load_registry_file
from hzz_plan.validation.issues import ValidationResult
from hzz_plan.validation.sections import validate_sections

logger = logging.getLogger(__name__)


def run(raw: Any, registry: SchemaRegistry | None = None) -> ValidationResult:
    """Validate *raw* against *registry* (the configured catalog by default)."""
    registry = registry or load_registry()
    result = validate_sections(raw, registry)

    if result.success:
        logger.info("Validated %d sections: no issues", len(result.data))
    else:
        logger.info("Validated %d sections: %d issue(s)", len(result.data), len(result.issues))
        for issue in result.issues:
            logger.debug("  %s", issue)
    return result


def main():
    """Validate a raw JSON document from disk and print the sanitized payload."""
    parser = argparse.ArgumentParser(description="Normalize and validate LLM-generated HZZ plan sections")
    parser.add_argument("path", type=Path, help="JSON file with the raw generated sections")
    parser.add_argument("--schema", type=Path, default=None, help="Field catalog to validate against (default: packaged catalog)")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    with open(args.path, "r", encoding="utf-8") as fopen:
        raw = json.load(fopen)

    registry = load_registry_file(args.schema) if args.schema else load_registry()
    result = run(raw, registry)

    json.dump(result.as_payload(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    sys.exit(0 if result.success else 1)


if __name__ == "__main__":
    main()
