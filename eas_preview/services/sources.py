"""
Input Sources

Loads the inputs of a preview run from the files a CI job leaves behind:
the `eas update --json` output, the Expo app config, the project's
package.json and the GitHub Actions event payload.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from eas_preview.logging_config import get_logger
from eas_preview.models import IssueContext, ProjectConfig, QrTarget, UpdateRecord
from eas_preview.services.target_resolver import InvalidInputError

logger = get_logger(__name__)

DEV_CLIENT_PACKAGE = "expo-dev-client"

_updates_adapter = TypeAdapter(List[UpdateRecord])


def _read_json(path: Path, description: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise InvalidInputError(f"{description} not found: {path}") from e
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"{description} is not valid JSON: {path} ({e})") from e


def load_updates(path: str) -> List[UpdateRecord]:
    """
    Load the updates published by `eas update --json`.

    Raises:
        InvalidInputError: If the file is missing or not a list of updates
    """
    data = _read_json(Path(path), "Update list")

    try:
        updates = _updates_adapter.validate_python(data)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid update list in {path}: {e}") from e

    logger.info(
        "Loaded updates",
        path=path,
        num_updates=len(updates),
        groups=sorted({update.group for update in updates})
    )
    return updates


def load_project_config(path: str) -> ProjectConfig:
    """
    Load the Expo app config.

    Raises:
        InvalidInputError: If the file is missing or has no slug
    """
    data = _read_json(Path(path), "App config")
    if not isinstance(data, dict):
        raise InvalidInputError(f"App config must be a JSON object: {path}")

    try:
        return ProjectConfig.from_expo_config(data)
    except (KeyError, ValidationError) as e:
        raise InvalidInputError(f"Invalid app config in {path}: {e}") from e


def infer_app_type(project_root: str) -> QrTarget:
    """
    Classify a project by the runtime its updates are meant for.

    Projects depending on `expo-dev-client` run updates in a development build,
    everything else in Expo Go.
    """
    package_path = Path(project_root) / "package.json"
    if not package_path.exists():
        logger.warning(
            "No package.json found, assuming Expo Go",
            project_root=project_root
        )
        return QrTarget.EXPO_GO

    package = _read_json(package_path, "package.json")
    if not isinstance(package, dict):
        raise InvalidInputError(f"package.json must be a JSON object: {package_path}")

    for section in ("dependencies", "devDependencies"):
        dependencies = package.get(section)
        if isinstance(dependencies, dict) and DEV_CLIENT_PACKAGE in dependencies:
            return QrTarget.DEV_BUILD

    return QrTarget.EXPO_GO


def resolve_issue_context(
    repository: Optional[str],
    issue_number: Optional[int] = None,
    event_path: Optional[str] = None
) -> Optional[IssueContext]:
    """
    Find the issue or pull request the comment belongs to.

    An explicit issue number wins over the event payload. Returns None when
    the run was not triggered from an issue or pull request.
    """
    if not repository:
        return None

    number = issue_number
    if number is None and event_path:
        event = _read_json(Path(event_path), "Event payload")
        if not isinstance(event, dict):
            raise InvalidInputError(f"Event payload must be a JSON object: {event_path}")
        number = _issue_number_from_event(event)

    if number is None:
        return None

    owner, _, repo = repository.partition("/")
    return IssueContext(owner=owner, repo=repo, number=number)


def _issue_number_from_event(event: Dict[str, Any]) -> Optional[int]:
    for key in ("pull_request", "issue"):
        payload = event.get(key)
        number = payload.get("number") if isinstance(payload, dict) else None
        if number:
            return int(number)
    return None
