"""
Cached command implementation.

Lists the versions of a product present in the local tool cache.
"""

from releasekit.cli.utils import settings_from_args
from releasekit.core.platform import detect_platform
from releasekit.core.tool_cache import ToolCache


def run(args) -> int:
    settings = settings_from_args(args)
    cache = ToolCache(settings.resolved_cache_dir())

    for version in cache.find_all_versions(args.product, detect_platform().arch):
        print(version)
    return 0
