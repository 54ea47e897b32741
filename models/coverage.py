"""
models/coverage.py
------------------
Domain records returned by the coverage database repositories.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Project:
    """A hardware project tracked in the coverage database."""
    id: int
    name: str

    def __str__(self) -> str:
        return f"{self.id}: {self.name}"


@dataclass(frozen=True)
class Release:
    """A named, versioned snapshot of a design under verification."""
    id: int
    name: str

    def __str__(self) -> str:
        return f"{self.id}: {self.name}"


@dataclass(frozen=True)
class Report:
    """
    A merge report attached to one release.

    Attributes:
        id: Row id in rel.coverage_merge_reports (the release report id).
        name: Report name from info.merge_reports (e.g. 'dcn_core_verif_plan').
    """
    id: int
    name: str

    def __str__(self) -> str:
        return f"{self.id}: {self.name}"


@dataclass(frozen=True)
class ReleaseReportInfo:
    """Release report id and owning project for a (release id, report name) pair."""
    release_report_id: int
    project_name: str


@dataclass(frozen=True)
class ReportInfo:
    """
    Everything needed to locate a report on disk, resolved from names.

    Attributes:
        release_id: Primary key of the release.
        report_id: Release report id (rel.coverage_merge_reports.id).
        project_name: Name of the project that owns the report.
    """
    release_id: int
    report_id: int
    project_name: str


@dataclass(frozen=True)
class ReleaseReport:
    """One report of a release, with its owning project."""
    release_id: int
    report_id: int
    project_name: str
    report_name: str
