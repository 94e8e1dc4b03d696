"""
Command modules for region_utils CLI
"""

from region_utils.commands.info import cmd_info_sources, cmd_info_states, cmd_info_artifacts
from region_utils.commands.build import cmd_build
from region_utils.commands.lookup import cmd_lookup

__all__ = [
    'cmd_info_sources',
    'cmd_info_states',
    'cmd_info_artifacts',
    'cmd_build',
    'cmd_lookup',
]
