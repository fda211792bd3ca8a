"""
Test Configuration

Pytest configuration and fixtures for the test suite.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from eas_preview.config import Settings
from eas_preview.models import ProjectConfig, UpdateRecord


@pytest.fixture
def sample_update_payload() -> List[Dict[str, Any]]:
    """Sample `eas update --json` output for one group published on both platforms."""
    return [
        {
            "id": "fake-android-id",
            "createdAt": "2023-02-04T14:15:20.365Z",
            "group": "fake-group-id",
            "branch": "main",
            "message": "feature: create new update",
            "runtimeVersion": "exposdk:47.0.0",
            "platform": "android",
            "manifestPermalink": "https://u.expo.dev/update/fake-android-id",
            "gitCommitHash": "aabbccdd"
        },
        {
            "id": "fake-ios-id",
            "createdAt": "2023-02-04T14:15:20.365Z",
            "group": "fake-group-id",
            "branch": "main",
            "message": "feature: create new update",
            "runtimeVersion": "exposdk:47.0.0",
            "platform": "ios",
            "manifestPermalink": "https://u.expo.dev/update/fake-ios-id",
            "gitCommitHash": "aabbccdd"
        }
    ]


@pytest.fixture
def updates_single(sample_update_payload: List[Dict[str, Any]]) -> List[UpdateRecord]:
    """Android and iOS updates sharing one update group."""
    return [UpdateRecord.model_validate(data) for data in sample_update_payload]


@pytest.fixture
def updates_multiple(updates_single: List[UpdateRecord]) -> List[UpdateRecord]:
    """Android and iOS updates, each in its own update group."""
    return [
        update.model_copy(update={"group": f"fake-group-{update.id}"})
        for update in updates_single
    ]


@pytest.fixture
def project_config() -> ProjectConfig:
    """Project config without a custom scheme."""
    return ProjectConfig(slug="fake-project", project_id="fake-project-id")


@pytest.fixture
def sample_app_json() -> Dict[str, Any]:
    """Sample app.json document."""
    return {
        "expo": {
            "name": "Fake Project",
            "slug": "fake-project",
            "scheme": ["ega", "expogithubaction"],
            "extra": {
                "eas": {"projectId": "fake-project-id"}
            }
        }
    }


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], str]:
    """Write a JSON document into the test directory and return its path."""
    def _write(name: str, data: Any) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def make_settings(
    tmp_path: Path,
    write_json: Callable[[str, Any], str],
    sample_update_payload: List[Dict[str, Any]],
    sample_app_json: Dict[str, Any]
) -> Callable[..., Settings]:
    """
    Build Settings for a run with input files in the test directory.

    Every field is passed explicitly so the CI environment of the test run
    cannot leak into the settings.
    """
    def _make(**overrides: Any) -> Settings:
        values = {
            "github_token": "test-token",
            "github_api_url": "https://api.github.test",
            "github_repository": "owner/repo",
            "github_event_path": None,
            "issue_number": 42,
            "updates_path": write_json("updates.json", sample_update_payload),
            "app_config_path": write_json("app.json", sample_app_json),
            "project_root": str(tmp_path),
            "qr_target": "dev-build",
            "branch_qr": False,
            "branch_id": None,
            "app_scheme": None,
            "comment_id": None,
            "github_output": None,
            "github_step_summary": None,
            "enable_github_comments": True,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make
