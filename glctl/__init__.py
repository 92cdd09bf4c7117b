"""
glctl: a command-line client for GitLab projects, groups and repository files.

Each subcommand parses its flags into a per-invocation options value, validates
its arguments, then calls the GitLab REST API v4 and prints the result.

Environment:
    GITLAB_TOKEN - GitLab Personal Access Token (required)
    GITLAB_URL   - GitLab instance URL (default: https://gitlab.com)
"""

from glctl.cli import main

__version__ = "0.1.0"
__all__ = ["main", "__version__"]
