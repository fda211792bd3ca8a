"""
Services Package

This package contains the building blocks of a preview run:
- target_resolver: QR target selection
- variables: Summary variable building
- summary: Preview comment rendering
- sources: Input file loading
- github_client: GitHub issue comments client
"""

from eas_preview.services.github_client import GitHubAPIError, GitHubAuthError, GitHubClient
from eas_preview.services.sources import (
    infer_app_type,
    load_project_config,
    load_updates,
    resolve_issue_context,
)
from eas_preview.services.summary import build_qr_url, choose_layout, render_summary
from eas_preview.services.target_resolver import InvalidInputError, resolve_qr_target
from eas_preview.services.variables import build_variables, get_schemes_in_order


__all__ = [
    "GitHubAPIError",
    "GitHubAuthError",
    "GitHubClient",
    "InvalidInputError",
    "build_qr_url",
    "build_variables",
    "choose_layout",
    "get_schemes_in_order",
    "infer_app_type",
    "load_project_config",
    "load_updates",
    "render_summary",
    "resolve_issue_context",
    "resolve_qr_target",
]
