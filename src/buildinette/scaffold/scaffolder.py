"""Runs a ScaffoldPlan: generate, vendor dependencies, set up the repository."""

from __future__ import annotations

from result import Err, Ok, Result

from buildinette.common import create_logger

from .fetcher import fetch_dependency
from .generator import generate_project
from .models import FetchFailurePolicy, ScaffoldError, ScaffoldPlan, ScaffoldReport
from .repository import setup_repository
from .templates import TemplateRenderer, ordered_dependencies

logger = create_logger("scaffold")


class Scaffolder:
    """Skeleton generation API."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self._renderer = renderer or TemplateRenderer()

    def run(self, plan: ScaffoldPlan) -> Result[ScaffoldReport, ScaffoldError]:
        """Execute the plan step by step.

        Nothing is rolled back: a failure leaves whatever was already written.
        A failing dependency clone aborts or is skipped according to
        ``plan.fetch_policy``; a failing remote registration is only reported.
        """
        logger.info(
            "Scaffolding",
            projects=[project.name for project in plan.projects],
            root=str(plan.repository_root),
        )
        report = ScaffoldReport()

        for project in plan.projects:
            match generate_project(project, plan.build, plan.dependencies, renderer=self._renderer):
                case Ok(_):
                    report.projects.append(project.target_directory)
                case Err(error):
                    return Err(error)

        for project in plan.projects:
            for dependency in ordered_dependencies(plan.dependencies):
                match fetch_dependency(dependency, project.target_directory):
                    case Ok(path):
                        report.vendored.append(path)
                    case Err(error) if plan.fetch_policy == FetchFailurePolicy.ABORT:
                        return Err(error)
                    case Err(error):
                        logger.warning("Skipping dependency", kind=dependency.kind.value, project=project.name)
                        report.skipped.append(dependency)
                        report.warnings.append(error.message)

        if plan.wants_repository:
            match setup_repository(plan.repository_root, plan.remotes):
                case Ok((added, remote_errors)):
                    report.repository = plan.repository_root
                    report.remotes.extend(added)
                    report.warnings.extend(error.message for error in remote_errors)
                case Err(error):
                    return Err(error)

        logger.success("Scaffolding finished", root=str(plan.repository_root), warnings=len(report.warnings))
        return Ok(report)
