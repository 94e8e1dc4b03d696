"""
Info command - Display the shapefile catalogue, state names and build artifacts
"""

from pathlib import Path

from region_utils.config import RELEASE_ASSETS
from region_utils.download.sources import SHAPEFILE_SOURCES, STATE_NAMES, construct_url
from region_utils.load_db.region_db import verify_artifacts


def cmd_info_sources(args):
    """Handle 'info sources' subcommand."""
    print("\nShapefile Sources (processing order):")
    print("=" * 70)
    for source in SHAPEFILE_SOURCES:
        print(f"  {source.region_type:6s} - {source.shapefile}")
        print(f"           {construct_url(source.archive, args.base_url)}")
    return 0


def cmd_info_states(args):
    """Handle 'info states' subcommand."""
    print("\nState Abbreviations:")
    print("=" * 70)
    for abbr, name in sorted(STATE_NAMES.items()):
        print(f"  {abbr} - {name}")
    return 0


def cmd_info_artifacts(args):
    """Handle 'info artifacts' subcommand: check the four release files."""
    build_dir = Path(args.output)
    problems = verify_artifacts(build_dir)
    print(f"\nBuild Artifacts in {build_dir}:")
    print("=" * 70)
    for name in RELEASE_ASSETS:
        status = problems.get(name, "ok")
        print(f"  {name:25s} - {status}")
    return 1 if problems else 0
