"""
L4 Execution — Node.js release index lookup.

Fetches the published release index and picks the newest version on a
channel. No fallback version is ever substituted.
"""

from __future__ import annotations

import logging

from phpjs_env.core.services.host_setup.domain.errors import ResolutionError
from phpjs_env.core.services.host_setup.domain.node_release import (
    major_version,
    select_release,
)
from phpjs_env.core.services.host_setup.execution.download import HttpFetcher

logger = logging.getLogger(__name__)

UNRESOLVED_MESSAGE = "❌ Could not determine Node.js version. Aborting Node.js setup."


def latest_node_release(
    fetcher: HttpFetcher,
    index_url: str,
    channel: str,
) -> tuple[str, str]:
    """Newest ``(version, major)`` on ``channel``, e.g. ``("v22.5.0", "22")``.

    Raises:
        FetchError: The index could not be downloaded or parsed.
        ResolutionError: No usable version on the channel.
    """
    index = fetcher.fetch_json(index_url)
    if not isinstance(index, list):
        logger.debug("Release index is a %s, not a list", type(index).__name__)
        raise ResolutionError(UNRESOLVED_MESSAGE)

    version = select_release(index, channel)
    major = major_version(version) if version else ""
    if not version or not major.isdigit():
        raise ResolutionError(UNRESOLVED_MESSAGE)
    return version, major
