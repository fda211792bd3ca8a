"""
Data Models Module

This module defines all Pydantic models used throughout the application.
Strong typing ensures data integrity and provides clear contracts between components.

Design Decisions:
- Use frozen Pydantic models for every value that crosses a component boundary
- Accept the camelCase keys produced by the EAS CLI without renaming them by hand
- Model the summary layout as a discriminated union chosen once per render
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================

class Platform(str, Enum):
    """Platforms an update can be published for."""
    ANDROID = "android"
    IOS = "ios"

    @property
    def display_name(self) -> str:
        """Human-readable platform name used in column headers."""
        return _PLATFORM_DISPLAY_NAMES[self]


_PLATFORM_DISPLAY_NAMES = {
    Platform.ANDROID: "Android",
    Platform.IOS: "iOS",
}


class QrTarget(str, Enum):
    """App runtime a scanned QR code should open the update with."""
    DEV_BUILD = "dev-build"
    EXPO_GO = "expo-go"


# =============================================================================
# Input Models
# =============================================================================

class UpdateRecord(BaseModel):
    """
    A single published update, as reported by `eas update --json`.

    Attributes:
        id: Update identifier
        created_at: ISO timestamp of the publish
        group: Update group shared by all platforms of one publish
        branch: Branch name the update was published to
        message: Update message
        runtime_version: Runtime version the update targets
        platform: Platform the update was built for
        manifest_permalink: Permanent manifest URL of the update
        git_commit_hash: Commit the update was published from
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    created_at: str
    group: str
    branch: str
    message: Optional[str] = None
    runtime_version: str
    platform: Platform
    manifest_permalink: str
    git_commit_hash: Optional[str] = None


class ProjectConfig(BaseModel):
    """The subset of the Expo app config needed to build preview links."""
    model_config = ConfigDict(frozen=True)

    slug: str
    name: Optional[str] = None
    scheme: Optional[Union[str, List[str]]] = None
    project_id: Optional[str] = None

    @classmethod
    def from_expo_config(cls, data: Dict[str, Any]) -> "ProjectConfig":
        """
        Build a ProjectConfig from raw Expo config.

        Accepts both the output of `expo config --json` and an `app.json`
        document that nests the config under an `expo` key.
        """
        if isinstance(data.get("expo"), dict):
            data = data["expo"]

        extra = data.get("extra")
        eas = extra.get("eas") if isinstance(extra, dict) else None
        if not isinstance(eas, dict):
            eas = {}

        return cls(
            slug=data["slug"],
            name=data.get("name"),
            scheme=data.get("scheme"),
            project_id=eas.get("projectId"),
        )


class IssueContext(BaseModel):
    """Issue or pull request the preview comment is posted on."""
    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    number: int = Field(ge=1)

    @property
    def full_repo_name(self) -> str:
        """Get the full repository name (owner/repo)."""
        return f"{self.owner}/{self.repo}"


# =============================================================================
# Summary Models
# =============================================================================

class LinkParameters(BaseModel):
    """
    Parameters used to build QR and "more info" links.

    `group_id` is only set when every update shares one group. `group_ids`
    always maps each platform to the group of its first update.
    """
    model_config = ConfigDict(frozen=True)

    app_scheme: Optional[str] = None
    project_id: str
    group_id: Optional[str] = None
    group_ids: Dict[Platform, str] = Field(default_factory=dict)
    branch_id: Optional[str] = None


class SummaryVariables(BaseModel):
    """Template variables derived once per invocation."""
    model_config = ConfigDict(frozen=True)

    project_name: str
    schemes: List[str] = Field(default_factory=list)
    platforms: List[Platform] = Field(default_factory=list)
    runtime_version: Optional[str] = None
    runtime_versions: List[str] = Field(default_factory=list)
    qr_target: QrTarget
    links: LinkParameters


class SingleGroupLayout(BaseModel):
    """One combined QR code for every update in the group (or the branch)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    runtime_versions: List[str] = Field(default_factory=list)
    info_link: str
    qr_url: str


class PlatformColumn(BaseModel):
    """A single platform's column in the side-by-side layout."""
    model_config = ConfigDict(frozen=True)

    platform: Platform
    runtime_version: str
    info_link: str
    qr_url: str


class MultiGroupLayout(BaseModel):
    """One QR code per platform, rendered side by side."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["multi"] = "multi"
    columns: List[PlatformColumn]


SummaryLayout = Annotated[
    Union[SingleGroupLayout, MultiGroupLayout],
    Field(discriminator="kind"),
]


# =============================================================================
# Internal Processing Models
# =============================================================================

class PreviewResult(BaseModel):
    """
    Outcome of a preview run.

    `github_comment_id` is None when no comment was posted.
    """
    model_config = ConfigDict(frozen=True)

    body: str
    comment_id: str
    variables: SummaryVariables
    github_comment_id: Optional[int] = None
