"""
services/report_paths.py
------------------------
Builds the location of a generated coverage report on the shared filesystem.

Report directories are symlinks maintained by the merge tooling; this module
only names them and never touches the filesystem.

Layout:
    {root}/{project}/{release}/{cov_type}/{report}/{report_type}/{changelist}[/{file_name}]
"""

import posixpath
from typing import Union

from config import REPORTS_ROOT

DASHBOARD_FILE = "dashboard.html"
COVERAGE_TYPES = ("func_cov", "code_cov")
REPORT_TYPES = ("individual", "accumulate")


def get_report_path(
    project_name: str,
    release_name: str,
    cov_type: str,
    report_name: str,
    report_type: str,
    changelist: Union[str, int],
    file_name: str = "",
    root: str = REPORTS_ROOT,
) -> str:
    """
    Join the report root with the naming segments.

    Args:
        project_name: Owning project (e.g. 'dcn6_0').
        release_name: Release (e.g. 'dcn6_0').
        cov_type: Coverage type, usually one of COVERAGE_TYPES.
        report_name: Merge report name (e.g. 'dcn_core_verif_plan').
        report_type: 'individual' or 'accumulate'.
        changelist: Changelist identifier (e.g. '8222907').
        file_name: File inside the report directory. Empty (the default)
            returns the directory itself; pass DASHBOARD_FILE for the dashboard.
        root: Report tree root.

    Returns:
        The path, using forward slashes only.
    """
    segments = [project_name, release_name, cov_type, report_name, report_type, str(changelist)]
    if file_name:
        segments.append(file_name)
    # Segments are relative; stray separators at their ends must not reset or double the path.
    cleaned = [s.replace("\\", "/").strip("/") for s in segments]
    return posixpath.join(root.replace("\\", "/"), *cleaned)
