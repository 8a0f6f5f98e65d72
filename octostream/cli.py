"""Command-line interface for octostream.

Lists stream to stdout as their pages arrive.

Usage:
    octostream collaborators octocat Hello-World
    octostream pulls python cpython --state all --page-size 100 --page-count 2
    octostream milestones octocat Hello-World --json
    octostream traffic octocat Hello-World --per week
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from octostream.client import GitHubClient
from octostream.exceptions import GitHubError, RateLimitError
from octostream.models import (
    ItemStateFilter,
    MilestoneRequest,
    PullRequestRequest,
    TrafficDayOrWeek,
    TrafficRequest,
)
from octostream.utils.logger import configure_logging
from octostream.utils.pagination import ApiOptions
from octostream.utils.streams import ItemStream

# ============================================================================
# Display Utilities
# ============================================================================


def format_header(text: str) -> str:
    return f"\n{'=' * 60}\n  {text}\n{'=' * 60}"


def format_json(data: dict[str, Any] | list[Any]) -> str:
    return json.dumps(data, indent=2, default=str)


async def print_stream(
    stream: ItemStream[Any],
    as_json: bool,
    render: Callable[[Any], str],
) -> int:
    """Print items as they arrive; JSON mode prints one object per line."""
    count = 0
    async for item in stream:
        count += 1
        if as_json:
            print(json.dumps(item.model_dump(mode="json"), default=str))
        else:
            print(f"  {count:3}. {render(item)}")
    if not as_json:
        print(f"\n  {count} item(s)")
    return 0


# ============================================================================
# Command Handlers
# ============================================================================


async def cmd_collaborators(client: GitHubClient, args: argparse.Namespace) -> int:
    stream = client.collaborators.get_all(args.owner, args.name, options=options_from_args(args))
    if not args.json:
        print(format_header(f"Collaborators: {args.owner}/{args.name}"))
    return await print_stream(stream, args.json, lambda user: user.login)


async def cmd_pulls(client: GitHubClient, args: argparse.Namespace) -> int:
    request = PullRequestRequest(state=ItemStateFilter(args.state))
    stream = client.pulls.get_all_for_repository(
        args.owner, args.name, request, options=options_from_args(args)
    )
    if not args.json:
        print(format_header(f"Pull requests ({args.state}): {args.owner}/{args.name}"))
    return await print_stream(stream, args.json, lambda pr: f"#{pr.number} {pr.title}")


async def cmd_milestones(client: GitHubClient, args: argparse.Namespace) -> int:
    stream = client.milestones.get_all_for_repository(
        args.owner, args.name, MilestoneRequest(), options=options_from_args(args)
    )
    if not args.json:
        print(format_header(f"Milestones: {args.owner}/{args.name}"))

    def render(milestone: Any) -> str:
        due = milestone.due_on.date().isoformat() if milestone.due_on else "no due date"
        return f"{milestone.title} ({due})"

    return await print_stream(stream, args.json, render)


async def cmd_traffic(client: GitHubClient, args: argparse.Namespace) -> int:
    per = TrafficRequest(per=TrafficDayOrWeek(args.per))
    views = await client.traffic.get_views(args.owner, args.name, per)
    clones = await client.traffic.get_clones(args.owner, args.name, per)
    if args.json:
        print(
            format_json(
                {"views": views.model_dump(mode="json"), "clones": clones.model_dump(mode="json")}
            )
        )
        return 0

    print(format_header(f"Traffic ({args.per}): {args.owner}/{args.name}"))
    print(f"  Views:  {views.count:,} ({views.uniques:,} unique)")
    print(f"  Clones: {clones.count:,} ({clones.uniques:,} unique)")
    return 0


# ============================================================================
# Argument Parser
# ============================================================================


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def options_from_args(args: argparse.Namespace) -> ApiOptions:
    return ApiOptions(
        start_page=args.start_page,
        page_size=args.page_size,
        page_count=args.page_count,
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="octostream",
        description="Stream paginated GitHub API results from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  octostream collaborators octocat Hello-World
  octostream pulls python cpython --state all --page-count 2
  octostream milestones octocat Hello-World --json
  octostream traffic octocat Hello-World --per week
        """,
    )

    parser.add_argument("--token", "-t", help="GitHub token (or set GITHUB_TOKEN)")
    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests and pages")
    parser.add_argument("--page-size", type=positive_int, help="Items per page")
    parser.add_argument("--page-count", type=positive_int, help="Maximum pages to fetch")
    parser.add_argument("--start-page", type=positive_int, help="First page to fetch")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    p = subparsers.add_parser("collaborators", help="List repository collaborators")
    p.add_argument("owner", help="Repository owner")
    p.add_argument("name", help="Repository name")

    p = subparsers.add_parser("pulls", help="List pull requests")
    p.add_argument("owner", help="Repository owner")
    p.add_argument("name", help="Repository name")
    p.add_argument(
        "--state",
        choices=[state.value for state in ItemStateFilter],
        default="open",
        help="State filter (default: open)",
    )

    p = subparsers.add_parser("milestones", help="List open milestones")
    p.add_argument("owner", help="Repository owner")
    p.add_argument("name", help="Repository name")

    p = subparsers.add_parser("traffic", help="Show views and clones")
    p.add_argument("owner", help="Repository owner")
    p.add_argument("name", help="Repository name")
    p.add_argument(
        "--per",
        choices=[per.value for per in TrafficDayOrWeek],
        default="day",
        help="Bucket size (default: day)",
    )

    return parser


# ============================================================================
# Main Entry Point
# ============================================================================

COMMANDS: dict[str, Callable[[GitHubClient, argparse.Namespace], Awaitable[int]]] = {
    "collaborators": cmd_collaborators,
    "pulls": cmd_pulls,
    "milestones": cmd_milestones,
    "traffic": cmd_traffic,
}


def create_client(args: argparse.Namespace) -> GitHubClient:
    return GitHubClient(token=args.token)


async def run(args: argparse.Namespace) -> int:
    async with create_client(args) as client:
        try:
            return await COMMANDS[args.command](client, args)
        except RateLimitError as e:
            print(f"Error: Rate limit exceeded! Resets at: {e.reset_at}", file=sys.stderr)
            return 1
        except GitHubError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.verbose:
        configure_logging(logging.DEBUG)

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
