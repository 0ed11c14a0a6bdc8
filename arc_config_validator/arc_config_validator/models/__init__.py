"""Data model shared by the loader, rules, session and reporter."""

from .document import Document, ManifestKind, SourceFile, SourceMap
from .finding import (
    ENVIRONMENT_RULE_ID,
    NO_FILES_RULE_ID,
    SYNTAX_RULE_ID,
    Finding,
    Severity,
    Stage,
)
from .report import Report

__all__ = [
    "Document",
    "ENVIRONMENT_RULE_ID",
    "Finding",
    "ManifestKind",
    "NO_FILES_RULE_ID",
    "Report",
    "SYNTAX_RULE_ID",
    "Severity",
    "SourceFile",
    "SourceMap",
    "Stage",
]
