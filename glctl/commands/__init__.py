"""Commands for glctl."""

from glctl.commands.base import Command, collect_pages, get_command_registry, register_command
from glctl.commands.delete_project import DeleteProjectCommand
from glctl.commands.edit_file import EditFileCommand

# Import all commands to register them
from glctl.commands.get_files import GetFilesCommand
from glctl.commands.get_groups import GetGroupsCommand
from glctl.commands.get_projects import GetProjectsCommand

__all__ = [
    "Command",
    "register_command",
    "get_command_registry",
    "collect_pages",
    "GetFilesCommand",
    "GetProjectsCommand",
    "GetGroupsCommand",
    "DeleteProjectCommand",
    "EditFileCommand",
]
