"""
Summary Variable Builder

Derives the template variables of a preview comment from the project config,
the published updates and the resolved QR target.

Design Decisions:
- Every derived value is computed here once, the renderer only formats
- Platform and runtime order follows the order of the update records
- Group ids are always mapped per platform, so per-platform links can be built
  even when a single group id is also known
"""

import re
from typing import Dict, List, Optional, Sequence

from eas_preview.models import (
    LinkParameters,
    Platform,
    ProjectConfig,
    QrTarget,
    SummaryVariables,
    UpdateRecord,
)

# Characters allowed in a URI scheme besides letters and digits are `+`, `-` and `.`
INVALID_SCHEME_CHARACTERS = re.compile(r"[^A-Za-z0-9+\-.]")


def get_schemes_in_order(config: ProjectConfig) -> List[str]:
    """
    Get the app schemes declared in the project config.

    A list of schemes is returned reversed, so the last declared scheme comes
    first. Existing comments and deep links rely on this order.
    """
    if config.scheme is None:
        return []
    if isinstance(config.scheme, str):
        return [config.scheme]
    return list(reversed(config.scheme))


def app_scheme_from_slug(slug: str) -> str:
    """Strip the characters a URI scheme cannot contain from a project slug."""
    return INVALID_SCHEME_CHARACTERS.sub("", slug)


def _unique(values: Sequence) -> List:
    """Deduplicate values, keeping the order of first appearance."""
    return list(dict.fromkeys(values))


def build_variables(
    config: ProjectConfig,
    updates: Sequence[UpdateRecord],
    qr_target: QrTarget,
    branch_id: Optional[str] = None,
    app_scheme: Optional[str] = None
) -> SummaryVariables:
    """
    Build the summary variables for a set of updates.

    Args:
        config: Project configuration
        updates: Updates published by the current run
        qr_target: Resolved QR target
        branch_id: Branch to link to instead of the update group
        app_scheme: Deep link scheme, defaults to a scheme derived from the slug

    Returns:
        SummaryVariables for the renderer
    """
    platforms = _unique([update.platform for update in updates])
    runtime_versions = _unique([update.runtime_version for update in updates])
    groups = _unique([update.group for update in updates])

    group_ids: Dict[Platform, str] = {}
    for update in updates:
        group_ids.setdefault(update.platform, update.group)

    scheme: Optional[str] = None
    if qr_target == QrTarget.DEV_BUILD:
        scheme = app_scheme or app_scheme_from_slug(config.slug)

    links = LinkParameters(
        app_scheme=scheme,
        project_id=config.project_id or "",
        group_id=groups[0] if len(groups) == 1 else None,
        group_ids=group_ids,
        branch_id=branch_id or None,
    )

    return SummaryVariables(
        project_name=config.slug,
        schemes=get_schemes_in_order(config),
        platforms=platforms,
        runtime_version=runtime_versions[0] if len(runtime_versions) == 1 else None,
        runtime_versions=runtime_versions,
        qr_target=qr_target,
        links=links,
    )
