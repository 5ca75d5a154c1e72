# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""Routing CLI for trying out routing decisions.

Routes tasks against a built-in demo registry (the default reasoning agents
plus a handful of infrastructure tool agents) and prints the decision.

Usage:
    omniroute route TEXT [--file-count N] [--urgency U] [--quality Q] [--budget B] [--json]
    omniroute demo [--json]
"""

from __future__ import annotations

import json as json_module
import logging
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from omniroute import __version__
from omniroute.config import get_settings
from omniroute.engine import RoutingEngine
from omniroute.enums import EnumCostConstraint, EnumQualityRequirement, EnumUrgency
from omniroute.errors import RoutingError
from omniroute.models import MetricsReport, RoutingDecision
from omniroute.registry import DEFAULT_REASONING_AGENTS, CapabilityRegistry, load_registry

console = Console()
error_console = Console(stderr=True)

DEMO_TOOL_AGENTS: dict[str, dict[str, Any]] = {
    "postgresql_enhanced": {
        "description": "PostgreSQL database access with schema introspection",
        "command": "npx",
    },
    "secure_filesystem": {
        "description": "Filesystem access with PII redaction and security policies",
        "command": "npx",
    },
    "github_integration": {
        "description": "GitHub repository, issue and pull request operations",
        "command": "npx",
    },
    "playwright_runner": {
        "description": "Playwright browser test execution",
        "command": "node",
    },
    "credit_rules": {
        "description": "Credit reporting and FCRA rule lookups",
        "command": "bash",
    },
}

DEMO_TASKS: tuple[tuple[str, dict[str, Any]], ...] = (
    (
        "Generate comprehensive tests for credit score calculation with FCRA compliance",
        {"fileCount": 4, "urgency": "normal", "budgetConstraint": "standard"},
    ),
    (
        "Review code for security vulnerabilities in PII handling",
        {"fileCount": 2, "urgency": "high", "budgetConstraint": "premium"},
    ),
    (
        "Create documentation for the dispute resolution API",
        {"fileCount": 1, "urgency": "low", "budgetConstraint": "budget"},
    ),
    (
        "Design the architecture for the new customer portal",
        {"fileCount": 6, "urgency": "normal", "budgetConstraint": "standard"},
    ),
    (
        "Debug the credit report parsing issue",
        {"fileCount": 3, "urgency": "high", "budgetConstraint": "budget"},
    ),
)


def demo_registry() -> CapabilityRegistry:
    return load_registry(
        tool_agents=DEMO_TOOL_AGENTS,
        reasoning_agents=DEFAULT_REASONING_AGENTS,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
    )


def _decision_to_dict(decision: RoutingDecision) -> dict[str, Any]:
    def candidate(scored: Any) -> dict[str, Any]:
        return {
            "agent": scored.name,
            "type": scored.candidate_type.value,
            "score": scored.score,
            "estimated_cost": str(scored.estimated_cost),
            "performance_prediction": scored.performance_prediction.value,
            "reasoning": scored.reasoning,
        }

    profile = decision.profile
    return {
        "decision_id": str(decision.decision_id),
        "profile": {
            "complexity_score": profile.complexity_score,
            "domain_tags": sorted(profile.domain_tags),
            "compliance_tags": sorted(profile.compliance_tags),
            "performance_need": profile.performance_need.value,
            "cost_constraint": profile.cost_constraint.value,
            "task_type": profile.task_type.value,
        },
        "selected": candidate(decision.selected),
        "fallbacks": [
            {**candidate(f), "reason": decision.fallback_reason}
            for f in decision.fallbacks
        ],
    }


def _print_decision(task_text: str, decision: RoutingDecision) -> None:
    profile = decision.profile
    console.print(f"[bold]Task:[/bold] {task_text}")
    console.print(
        f"  complexity={profile.complexity_score} "
        f"domains={', '.join(sorted(profile.domain_tags)) or '-'} "
        f"compliance={', '.join(sorted(profile.compliance_tags)) or '-'} "
        f"type={profile.task_type.value}"
    )

    table = Table(show_header=True)
    table.add_column("Rank", justify="right", style="dim")
    table.add_column("Agent", style="cyan")
    table.add_column("Type", style="blue")
    table.add_column("Score", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Prediction", style="green")

    ranked = (decision.selected, *decision.fallbacks)
    for index, scored in enumerate(ranked, 1):
        table.add_row(
            str(index),
            scored.name,
            scored.candidate_type.value,
            f"{scored.score:.1f}",
            f"${scored.estimated_cost}",
            scored.performance_prediction.value,
        )
    console.print(table)
    console.print(f"  [dim]{decision.selected.reasoning}[/dim]")


def _print_metrics(report: MetricsReport) -> None:
    dist = report.agent_distribution
    costs = report.cost_analysis
    console.print(
        f"[bold]Metrics[/bold] (last {report.window_size} of {report.total_routed})"
    )
    console.print(
        f"  tool_agent={dist.tool_agent} reasoning_agent={dist.reasoning_agent} "
        f"hybrid={dist.hybrid}"
    )
    console.print(
        f"  total=${costs.total_estimated_cost} "
        f"average=${costs.average_cost_per_task} trend={costs.cost_trend.value}"
    )
    for rec in report.recommendations:
        console.print(
            f"  [yellow]{rec.type.value}[/yellow] {rec.agent} "
            f"({rec.usage_share:.0%}): {rec.suggestion}"
        )


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, version: bool, verbose: bool) -> None:
    """Task-to-agent routing CLI.

    Examples:

        omniroute route "Write e2e tests for the login flow" --file-count 3

        omniroute demo --json
    """
    if version:
        click.echo(f"omniroute {__version__}")
        ctx.exit(0)

    _configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("route")
@click.argument("task_text")
@click.option("--file-count", type=click.IntRange(min=0), help="Files touched by the task.")
@click.option("--urgency", type=click.Choice([u.value for u in EnumUrgency]))
@click.option(
    "--quality", type=click.Choice([q.value for q in EnumQualityRequirement])
)
@click.option("--budget", type=click.Choice([b.value for b in EnumCostConstraint]))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def cmd_route(
    task_text: str,
    file_count: int | None,
    urgency: str | None,
    quality: str | None,
    budget: str | None,
    as_json: bool,
) -> None:
    """Route a single task against the demo registry."""
    engine = RoutingEngine(demo_registry(), settings=get_settings())
    context = {
        "file_count": file_count,
        "urgency": urgency,
        "quality_requirement": quality,
        "budget_constraint": budget,
    }
    try:
        decision = engine.route(task_text, context)
    except RoutingError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json_module.dumps(_decision_to_dict(decision), indent=2))
    else:
        _print_decision(task_text, decision)


@cli.command("demo")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def cmd_demo(as_json: bool) -> None:
    """Route a fixed set of sample tasks and show the resulting metrics."""
    engine = RoutingEngine(demo_registry(), settings=get_settings())
    results: list[dict[str, Any]] = []

    for task_text, context in DEMO_TASKS:
        try:
            decision = engine.route(task_text, context)
        except RoutingError as e:
            error_console.print(f"[red]{task_text}: {e}[/red]")
            continue
        if as_json:
            results.append({"task": task_text, **_decision_to_dict(decision)})
        else:
            _print_decision(task_text, decision)
            console.print()

    report = engine.get_metrics()
    if as_json:
        click.echo(
            json_module.dumps(
                {"decisions": results, "metrics": report.model_dump(mode="json")},
                indent=2,
            )
        )
    else:
        _print_metrics(report)


if __name__ == "__main__":
    cli()
