"""
Data Models for the Deployment Artifacts Report

These describe what we pull out of a Salesforce deploy result and how
we want to print it. The deploy result itself stays a plain dict.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum


# ==============================================================================
# ENUMS - Predefined Constants
# ==============================================================================

class PresentationMode(Enum):
    """How the report is printed"""
    FULL = "full"          # every component, grouped by type
    SUMMARY = "summary"    # one count line per component type
    RAW = "raw"            # the deploy result as JSON, nothing else

    @classmethod
    def from_flags(cls, summary: bool = False, raw: bool = False) -> "PresentationMode":
        if raw:
            return cls.RAW
        if summary:
            return cls.SUMMARY
        return cls.FULL


class RecordKind(Enum):
    """Component record collections inside a deploy result"""
    SUCCESS = "componentSuccesses"
    FAILURE = "componentFailures"


# ==============================================================================
# STYLE - colors and glyphs
# ==============================================================================

GREEN_COLOR = '\x1b[32m'
RED_COLOR = '\x1b[31m'
RESET_COLOR = '\x1b[0m'

SUCCESS_GLYPH = '✔ '  # extra space is intentional
ERROR_GLYPH = '✖ '    # extra space is intentional


@dataclass(frozen=True)
class StyleConfig:
    """
    Escape codes and glyphs wrapped around each component label.
    Disabled pieces are empty strings so they can always be concatenated.
    """
    success_color: str = ''
    error_color: str = ''
    reset_color: str = ''
    success_glyph: str = ''
    error_glyph: str = ''

    @classmethod
    def resolve(cls, colors: bool = True, glyphs: bool = True) -> "StyleConfig":
        return cls(
            success_color=GREEN_COLOR if colors else '',
            error_color=RED_COLOR if colors else '',
            reset_color=RESET_COLOR if colors else '',
            success_glyph=SUCCESS_GLYPH if glyphs else '',
            error_glyph=ERROR_GLYPH if glyphs else '',
        )


# ==============================================================================
# DATA CLASSES - Our Domain Models
# ==============================================================================

@dataclass(frozen=True)
class DeploySummary:
    """
    Top level facts about a deployment.
    Any of them may be missing from the deploy result; missing is None.
    """
    created_by_name: Optional[str] = None
    created_date: Optional[str] = None
    completed_date: Optional[str] = None
    check_only: Optional[bool] = None
    run_tests_enabled: Optional[bool] = None
    status: Optional[str] = None
    number_components_total: Optional[int] = None
    number_components_deployed: Optional[int] = None
    number_component_errors: Optional[int] = None


@dataclass(frozen=True)
class ErrorEntry:
    """
    One failed component, as printed in the Errors block
    Example: ApexClass/OrderTriggerHelper(12:5) : Variable does not exist: foo
    """
    component_name: Optional[str] = None
    component_type: Optional[str] = None
    problem: Optional[str] = None
    problem_type: Optional[str] = None
    line_number: Optional[Any] = None
    column_number: Optional[Any] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ErrorEntry":
        return cls(
            component_name=record.get("fullName"),
            component_type=record.get("componentType"),
            problem=record.get("problem"),
            problem_type=record.get("problemType"),
            line_number=record.get("lineNumber"),
            column_number=record.get("columnNumber"),
        )
