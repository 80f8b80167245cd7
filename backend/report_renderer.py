"""
Deployment report rendering

Turns a deploy result into the lines printed by the artifacts command:

    Deployment Result for Id 0Afxx0000000001

    ****** Deployment Summary ******
        Created By                 : Jane Admin
        ...

    ****** Components ******
    ApexClass
        Bar
        Foo

    ****** Errors ******
    ApexClass/Baz(5:12) : Compile error

Every function here is pure: same document, mode and style in, same lines out.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Iterable, List

from deploy_models import DeploySummary, ErrorEntry, PresentationMode, RecordKind, StyleConfig
from result_extractor import extract_records, extract_summary

logger = logging.getLogger(__name__)

INDENT = '    '

SUMMARY_HEADER = '****** Deployment Summary ******'
COMPONENTS_HEADER = '****** Components ******'
COMPONENTS_SUMMARY_HEADER = '****** Components Summary ******'
ERRORS_HEADER = '****** Errors ******'

SUMMARY_LABELS = [
    ('Created By', 'created_by_name'),
    ('Created Date', 'created_date'),
    ('Completed Date', 'completed_date'),
    ('Check Only', 'check_only'),
    ('Run Tests Enabled', 'run_tests_enabled'),
    ('Status', 'status'),
    ('Total Number of Components', 'number_components_total'),
    ('Success Count', 'number_components_deployed'),
    ('Failure Count', 'number_component_errors'),
]
_LABEL_WIDTH = max(len(label) for label, _ in SUMMARY_LABELS)


def render_summary(summary: DeploySummary) -> List[str]:
    # Missing values print as None
    return [
        f"{INDENT}{label:<{_LABEL_WIDTH}} : {getattr(summary, attr)}"
        for label, attr in SUMMARY_LABELS
    ]


def component_type_of(component: Dict[str, Any]) -> str | None:
    """componentType of a record, or None when it is missing, empty or not a string"""
    component_type = component.get('componentType')
    if isinstance(component_type, str) and component_type:
        return component_type
    return None


def build_artifact_index(successes: Iterable[Dict[str, Any]],
                         failures: Iterable[Dict[str, Any]],
                         style: StyleConfig) -> Dict[str, List[str]]:
    """
    Group decorated component labels by componentType.
    Successes go in first, then failures, each in input order.
    Records without a string componentType are left out.
    """
    artifacts: Dict[str, List[str]] = {}

    for component in successes:
        component_type = component_type_of(component)
        if component_type:
            artifacts.setdefault(component_type, []).append(
                style.success_color + style.success_glyph + str(component.get('fullName')) + style.reset_color
            )

    for component in failures:
        component_type = component_type_of(component)
        if component_type:
            artifacts.setdefault(component_type, []).append(
                style.error_color + style.error_glyph + str(component.get('fullName')) + style.reset_color
            )

    logger.debug("Artifact index built: %d type(s)", len(artifacts))
    return artifacts


def build_error_list(failures: Iterable[Dict[str, Any]]) -> List[ErrorEntry]:
    return [ErrorEntry.from_record(component) for component in failures]


def render_artifacts(artifacts: Dict[str, List[str]], mode: PresentationMode) -> List[str]:
    if not artifacts:
        return []

    lines: List[str] = []
    if mode is PresentationMode.SUMMARY:
        lines.extend(['', COMPONENTS_SUMMARY_HEADER])
        for component_type in sorted(artifacts):
            lines.append(f"{INDENT}{component_type} ({len(artifacts[component_type])})")
        return lines

    lines.extend(['', COMPONENTS_HEADER])
    for component_type in sorted(artifacts):
        lines.append(component_type)
        # Sorted as printed, so color codes and glyphs take part in the order
        for item in sorted(artifacts[component_type]):
            lines.append(INDENT + item)
    return lines


def format_error(entry: ErrorEntry) -> str:
    if entry.line_number:
        return (f"{entry.component_type}/{entry.component_name}"
                f"({entry.line_number}:{entry.column_number}) : {entry.problem}")
    return f"{entry.component_type}/{entry.component_name} : {entry.problem}"


def render_errors(errors: List[ErrorEntry]) -> List[str]:
    if not errors:
        return []
    return ['', ERRORS_HEADER] + [format_error(entry) for entry in errors]


def render_raw(doc: Any) -> Any:
    return doc


def dump_raw(doc: Any) -> str:
    return json.dumps(render_raw(doc), indent=2, default=str)


def render_report(doc: Any,
                  deployment_id: str,
                  mode: PresentationMode = PresentationMode.FULL,
                  style: StyleConfig | None = None) -> List[str]:
    """
    Build every output line for one deploy result.

    In RAW mode the result is a single line holding the JSON document.
    """
    if mode is PresentationMode.RAW:
        return [dump_raw(doc)]

    style = style or StyleConfig()
    successes = extract_records(doc, RecordKind.SUCCESS)
    failures = extract_records(doc, RecordKind.FAILURE)

    artifacts = build_artifact_index(successes, failures, style)
    errors = build_error_list(failures)

    lines = ['', f"Deployment Result for Id {deployment_id}", '', SUMMARY_HEADER]
    lines.extend(render_summary(extract_summary(doc)))
    lines.extend(render_artifacts(artifacts, mode))
    lines.extend(render_errors(errors))
    return lines
