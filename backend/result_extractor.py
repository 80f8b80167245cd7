# result_extractor.py
from __future__ import annotations
from typing import Any, Dict, List
import logging

from deploy_models import DeploySummary, RecordKind

logger = logging.getLogger(__name__)

_MISSING = object()

# DeploySummary attribute -> deploy result field
SUMMARY_FIELDS = {
    "created_by_name": "createdByName",
    "created_date": "createdDate",
    "completed_date": "completedDate",
    "check_only": "checkOnly",
    "run_tests_enabled": "runTestsEnabled",
    "status": "status",
    "number_components_total": "numberComponentsTotal",
    "number_components_deployed": "numberComponentsDeployed",
    "number_component_errors": "numberComponentErrors",
}


def _search(doc: Any, name: str) -> Any:
    # Explicit stack so deeply nested documents cannot exhaust the recursion limit
    stack = [doc]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            if name in node:
                return node[name]
            children = list(node.values())
        elif isinstance(node, (list, tuple)):
            children = list(node)
        else:
            continue
        # reversed so the first child is popped next
        stack.extend(reversed(children))
    return _MISSING


def find_first(doc: Any, name: str, default: Any = None) -> Any:
    """
    Return the value of the first key called `name` anywhere under `doc`.

    Search order is pre-order depth-first in document order: a mapping's own
    keys are checked before any of its values are descended into, and values
    and list items are visited in the order they appear. The first key found
    wins even if its value is null. Returns `default` when no key matches.
    """
    found = _search(doc, name)
    return default if found is _MISSING else found


def extract_summary(doc: Any) -> DeploySummary:
    values = {attr: find_first(doc, field) for attr, field in SUMMARY_FIELDS.items()}
    return DeploySummary(**values)


def extract_records(doc: Any, kind: RecordKind) -> List[Dict[str, Any]]:
    """
    Component records for `kind` (successes or failures).

    Accepts the collection as a list, as a list wrapped in one more list, or
    as a single object (the Metadata API drops the array for one element).
    Anything else is treated as no records.
    """
    found = find_first(doc, kind.value)
    if isinstance(found, list) and found and isinstance(found[0], list):
        found = found[0]
    if isinstance(found, dict):
        found = [found]
    if not isinstance(found, list):
        logger.debug("%s: none found", kind.value)
        return []

    records = [r for r in found if isinstance(r, dict)]
    if len(records) != len(found):
        logger.debug("%s: skipped %d non-object entr(ies)", kind.value, len(found) - len(records))
    logger.debug("%s: %d record(s)", kind.value, len(records))
    return records
