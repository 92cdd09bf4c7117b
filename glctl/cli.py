"""CLI entry point for glctl."""

from __future__ import annotations

import argparse
import os
import sys
from typing import TextIO

import requests

# Ensure all commands are registered by importing the commands package
import glctl.commands  # noqa: F401
from glctl.client import GitLabClient
from glctl.commands import get_command_registry
from glctl.logging_utils import setup_logging
from glctl.models import DEFAULT_GITLAB_URL, GlctlError, UsageError

VERB_HELP = {
    "get": "Display one or many GitLab resources",
    "delete": "Delete a GitLab resource",
    "edit": "Edit a GitLab resource",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glctl",
        description="Command-line client for GitLab projects, groups and repository files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
    GITLAB_TOKEN - GitLab Personal Access Token (required)
    GITLAB_URL   - GitLab instance URL (default: https://gitlab.com)

Examples:
    # List the files of a project
    glctl get files myorg/myproject

    # List every file on a branch, walking all pages
    glctl get files myorg/myproject --ref develop --all

    # Print a single file
    glctl get files myorg/myproject --path README.md --raw

    # List groups, 10 per page, second page
    glctl get groups --page 2 --per-page 10

    # Delete a project
    glctl delete project myorg/old-project

    # Replace a file's content from a local file
    glctl edit file myorg/myproject --path config.yml --file ./config.yml -m "Update config"
""",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show what would be changed without changing it")
    parser.add_argument("--json", action="store_true", dest="json_output", help="Emit log lines as JSON (to stderr)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--gitlab-url", default=None, help="GitLab instance URL (default: from GITLAB_URL env or https://gitlab.com)"
    )

    verbs = parser.add_subparsers(dest="verb", required=True, help="Action to perform")
    registry = get_command_registry()
    for verb in sorted(registry):
        verb_parser = verbs.add_parser(verb, help=VERB_HELP.get(verb))
        resources = verb_parser.add_subparsers(dest="resource", required=True, help="Resource type")
        for resource, cmd_cls in sorted(registry[verb].items()):
            sub = resources.add_parser(resource, aliases=list(cmd_cls.aliases), help=cmd_cls.__doc__)
            cmd_cls.add_arguments(sub)
            sub.set_defaults(command_cls=cmd_cls)

    return parser


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Resolve GitLab URL
    gitlab_url = args.gitlab_url or os.environ.get("GITLAB_URL", DEFAULT_GITLAB_URL)

    # Get token
    token = os.environ.get("GITLAB_TOKEN")
    if not token:
        print("ERROR: GITLAB_TOKEN environment variable is not set.", file=sys.stderr)
        return 1

    logger = setup_logging(json_mode=args.json_output, verbose=args.verbose)

    client = GitLabClient(base_url=gitlab_url, token=token, dry_run=args.dry_run)
    command = args.command_cls(client=client, args=args, out=out)

    try:
        command.validate()
    except UsageError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        logger.info("DRY-RUN MODE - no changes will be made")

    try:
        command.run()
    except requests.HTTPError as e:
        logger.error(f"Fatal API error: {e}")
        return 1
    except requests.RequestException as e:
        logger.error(f"Request failed: {e}")
        return 1
    except GlctlError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
