"""
Preview Processor Module

This module orchestrates a preview run.
It coordinates loading the published updates, resolving the QR target,
rendering the summary and posting it back to GitHub.

Design Decisions:
- Single responsibility: orchestrate, every step lives in a service
- Rendering is pure, only loading, posting and outputs touch the outside
- A run outside of an issue or pull request is not an error, it just
  skips the comment. A missing token still is, while comments are enabled
- Every failure is logged once here and re-raised as PreviewProcessorError
"""

from typing import Dict, Optional

import httpx

from eas_preview.config import Settings, get_settings
from eas_preview.logging_config import get_logger
from eas_preview.models import PreviewResult, SummaryVariables
from eas_preview.services.action_outputs import append_step_summary, write_outputs
from eas_preview.services.github_client import GitHubClient
from eas_preview.services.sources import (
    infer_app_type,
    load_project_config,
    load_updates,
    resolve_issue_context,
)
from eas_preview.services.summary import render_summary
from eas_preview.services.target_resolver import InvalidInputError, resolve_qr_target
from eas_preview.services.variables import build_variables

logger = get_logger(__name__)


class PreviewProcessorError(Exception):
    """Custom exception for preview processing errors."""
    pass


class PreviewCommentProcessor:
    """
    Orchestrates a preview run.

    This is the main coordinator that:
    1. Loads the published updates and the app config
    2. Resolves the QR target
    3. Builds the summary variables and renders the comment
    4. Posts the comment and writes the step outputs

    Usage:
        processor = PreviewCommentProcessor(get_settings())
        result = await processor.process()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the preview processor.

        Args:
            settings: Settings of the run, loaded from the environment by default
            transport: Custom httpx transport for the GitHub client, used by tests
        """
        self.settings = settings or get_settings()
        self._transport = transport

    async def process(self) -> PreviewResult:
        """
        Execute the complete preview run.

        Returns:
            PreviewResult with the rendered comment

        Raises:
            PreviewProcessorError: If any step fails
        """
        logger.info(
            "Starting preview run",
            updates_path=self.settings.updates_path,
            app_config_path=self.settings.app_config_path,
            branch_qr=self.settings.branch_qr
        )

        try:
            result = await self._run()
        except Exception as e:
            logger.error(
                "Preview run failed",
                error=str(e),
                error_type=type(e).__name__
            )
            raise PreviewProcessorError(f"Preview run failed: {e}") from e

        logger.info(
            "Preview run completed successfully",
            project=result.variables.project_name,
            qr_target=result.variables.qr_target.value,
            github_comment_id=result.github_comment_id
        )
        return result

    async def _run(self) -> PreviewResult:
        settings = self.settings

        updates = load_updates(settings.updates_path)
        config = load_project_config(settings.app_config_path)
        if not config.project_id:
            raise InvalidInputError(
                f"Missing EAS project ID (extra.eas.projectId) in {settings.app_config_path}"
            )

        qr_target = resolve_qr_target(
            settings.qr_target,
            lambda: infer_app_type(settings.project_root)
        )

        if settings.branch_qr and not settings.branch_id:
            raise InvalidInputError("Branch QR codes require a branch ID (BRANCH_ID)")

        variables = build_variables(
            config,
            updates,
            qr_target,
            branch_id=settings.branch_id if settings.branch_qr else None,
            app_scheme=settings.app_scheme
        )
        body = render_summary(updates, variables, settings.branch_qr)
        comment_id = settings.comment_id or f"app:@{config.project_id}"

        github_comment_id = await self._post_comment(body, comment_id)

        result = PreviewResult(
            body=body,
            comment_id=comment_id,
            variables=variables,
            github_comment_id=github_comment_id,
        )
        self._write_outputs(result)
        return result

    async def _post_comment(self, body: str, comment_id: str) -> Optional[int]:
        """Post the comment, if comments are enabled and there is somewhere to post it."""
        settings = self.settings

        if not settings.enable_github_comments:
            logger.info("GitHub comments disabled, skipping comment")
            return None

        # Raises GitHubAuthError without a token, even when there is nothing to post on
        client = GitHubClient(
            settings.github_token,
            api_url=settings.github_api_url,
            transport=self._transport
        )

        context = resolve_issue_context(
            settings.github_repository,
            settings.issue_number,
            settings.github_event_path
        )
        if context is None:
            logger.info("Not an issue or pull request context, skipping comment")
            return None

        return await client.upsert_issue_comment(context, body, comment_id)

    def _write_outputs(self, result: PreviewResult) -> None:
        """Expose the run's results as step outputs and in the job summary."""
        if self.settings.github_output:
            write_outputs(self.settings.github_output, build_outputs(result))
        if self.settings.github_step_summary:
            append_step_summary(self.settings.github_step_summary, result.body)


def build_outputs(result: PreviewResult) -> Dict[str, str]:
    """Collect the step outputs of a preview run."""
    variables: SummaryVariables = result.variables
    outputs = {
        "projectId": variables.links.project_id,
        "projectName": variables.project_name,
        "qrTarget": variables.qr_target.value,
        "platforms": ",".join(p.value for p in variables.platforms),
        "commentId": result.comment_id,
        "comment": result.body,
    }
    if variables.links.group_id:
        outputs["groupId"] = variables.links.group_id
    if variables.runtime_version:
        outputs["runtimeVersion"] = variables.runtime_version
    return outputs


async def process_preview(settings: Optional[Settings] = None) -> PreviewResult:
    """
    Convenience function to run a preview.

    This is the main entry point used by run.py.
    """
    processor = PreviewCommentProcessor(settings)
    return await processor.process()
