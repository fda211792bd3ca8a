"""
Preview Summary Renderer

Renders the markdown body of a preview comment.

Design Decisions:
- Pick the layout once (single update group or one column per platform),
  then render it with a dedicated function
- Build every URL from LinkParameters so the output is fully deterministic
- Never raise on odd input shapes, render whatever the updates describe
"""

from typing import List, Optional, Sequence
from urllib.parse import urlencode

from eas_preview.models import (
    LinkParameters,
    MultiGroupLayout,
    PlatformColumn,
    SingleGroupLayout,
    SummaryLayout,
    SummaryVariables,
    UpdateRecord,
)

QR_BASE_URL = "https://qr.expo.dev/eas-update"
UPDATE_PAGE_URL = "https://expo.dev/projects/{project_id}/updates/{group_id}"
QR_IMAGE_SIZE = "250px"
LIST_DELIMITER = ", "

HEADER = "🚀 Expo preview is ready!"
FOOTER = (
    "> Learn more about [𝝠 Expo Github Action]"
    "(https://github.com/expo/expo-github-action/tree/main/preview#example-workflows)"
)


# =============================================================================
# Links
# =============================================================================

def build_qr_url(
    links: LinkParameters,
    group_id: Optional[str] = None,
    branch_id: Optional[str] = None
) -> str:
    """
    Build the URL of a QR code image.

    The app scheme is only included for development builds, Expo Go does not
    need one. A branch QR keys off `branchId`, anything else off `groupId`.
    """
    params = []
    if links.app_scheme is not None:
        params.append(("appScheme", links.app_scheme))
    params.append(("projectId", links.project_id))
    if branch_id is not None:
        params.append(("branchId", branch_id))
    else:
        params.append(("groupId", group_id or ""))
    return f"{QR_BASE_URL}?{urlencode(params)}"


def build_update_page_url(links: LinkParameters, group_id: str) -> str:
    """Build the URL of an update group's page on expo.dev."""
    return UPDATE_PAGE_URL.format(project_id=links.project_id, group_id=group_id)


def qr_image(url: str) -> str:
    """Render a linked QR code image."""
    return (
        f'<a href="{url}"><img src="{url}" '
        f'width="{QR_IMAGE_SIZE}" height="{QR_IMAGE_SIZE}" /></a>'
    )


# =============================================================================
# Layouts
# =============================================================================

def choose_layout(
    updates: Sequence[UpdateRecord],
    variables: SummaryVariables,
    is_branch_qr: bool
) -> SummaryLayout:
    """
    Choose how the QR codes of the summary are laid out.

    A branch QR, or updates that all belong to one group, get a single
    combined QR code. Otherwise every platform gets its own column.
    """
    links = variables.links
    groups = {update.group for update in updates}

    if is_branch_qr or len(groups) <= 1:
        group_id = links.group_id or (updates[0].group if updates else "")
        if is_branch_qr:
            qr_url = build_qr_url(links, branch_id=links.branch_id or "")
        else:
            qr_url = build_qr_url(links, group_id=group_id)
        return SingleGroupLayout(
            runtime_versions=variables.runtime_versions,
            info_link=build_update_page_url(links, group_id),
            qr_url=qr_url,
        )

    columns = []
    for platform in variables.platforms:
        update = next(u for u in updates if u.platform == platform)
        group_id = links.group_ids.get(platform, update.group)
        columns.append(PlatformColumn(
            platform=platform,
            runtime_version=update.runtime_version,
            info_link=build_update_page_url(links, group_id),
            qr_url=build_qr_url(links, group_id=group_id),
        ))
    return MultiGroupLayout(columns=columns)


def render_single_group(layout: SingleGroupLayout) -> List[str]:
    """Render the runtime version, info link and the combined QR code."""
    lines = []
    if layout.runtime_versions:
        versions = LIST_DELIMITER.join(f"**{v}**" for v in layout.runtime_versions)
        lines.append(f"- Runtime Version → {versions}")
    lines.append(f"- **[More info]({layout.info_link})**")
    lines.append("")
    lines.append(qr_image(layout.qr_url))
    return lines


def render_multi_group(layout: MultiGroupLayout) -> List[str]:
    """Render one column per platform, each with its own QR code."""
    headers = [
        f"{column.platform.display_name} <br /> _({column.runtime_version})_ <br /> "
        f"**[More info]({column.info_link})**"
        for column in layout.columns
    ]
    return [
        "",
        " | ".join(headers),
        " | ".join("---" for _ in layout.columns),
        " | ".join(qr_image(column.qr_url) for column in layout.columns),
    ]


# =============================================================================
# Summary
# =============================================================================

def _overview_lines(variables: SummaryVariables) -> List[str]:
    lines = [f"- Project → **{variables.project_name}**"]

    platforms = LIST_DELIMITER.join(f"**{p.value}**" for p in variables.platforms)
    if len(variables.platforms) == 1:
        lines.append(f"- Platform → {platforms}")
    else:
        lines.append(f"- Platforms → {platforms}")

    if variables.schemes:
        label = "Scheme" if len(variables.schemes) == 1 else "Schemes"
        schemes = LIST_DELIMITER.join(f"**{s}**" for s in variables.schemes)
        lines.append(f"- {label} → {schemes}")

    return lines


def render_summary(
    updates: Sequence[UpdateRecord],
    variables: SummaryVariables,
    is_branch_qr: bool = False
) -> str:
    """
    Render the preview comment body.

    Args:
        updates: Updates published by the current run
        variables: Variables built from the same updates
        is_branch_qr: Link the QR code to the branch instead of the update group

    Returns:
        Markdown comment body
    """
    layout = choose_layout(updates, variables, is_branch_qr)

    lines = [HEADER, ""]
    lines.extend(_overview_lines(variables))
    if isinstance(layout, SingleGroupLayout):
        lines.extend(render_single_group(layout))
    else:
        lines.extend(render_multi_group(layout))
    lines.extend(["", FOOTER])

    return "\n".join(lines)
