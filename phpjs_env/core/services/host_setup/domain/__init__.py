"""
L1 Domain — ``__init__.py`` re-exports all pure domain functions.

These functions have NO subprocess calls, NO filesystem access,
NO network calls. Pure input→output.
"""

from phpjs_env.core.services.host_setup.domain.answers import is_yes  # noqa: F401
from phpjs_env.core.services.host_setup.domain.errors import (  # noqa: F401
    CommandError,
    FetchError,
    IntegrityError,
    PreconditionError,
    ResolutionError,
    SetupError,
)
from phpjs_env.core.services.host_setup.domain.line_match import (  # noqa: F401
    contains_literal,
    has_line_prefix,
    line_present,
)
from phpjs_env.core.services.host_setup.domain.node_release import (  # noqa: F401
    CHANNELS,
    CURRENT,
    LTS,
    major_version,
    nodesource_source_line,
    parse_channel,
    select_release,
)
