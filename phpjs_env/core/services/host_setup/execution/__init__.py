"""
L4 Execution — ``__init__.py`` re-exports all side-effecting helpers.
"""

from phpjs_env.core.services.host_setup.execution.apt import AptClient  # noqa: F401
from phpjs_env.core.services.host_setup.execution.composer import (  # noqa: F401
    file_digest,
    install_composer,
)
from phpjs_env.core.services.host_setup.execution.download import HttpFetcher  # noqa: F401
from phpjs_env.core.services.host_setup.execution.host_files import (  # noqa: F401
    clear_directory,
    ensure_line,
    replace_in_file,
    write_file,
)
from phpjs_env.core.services.host_setup.execution.node_index import (  # noqa: F401
    latest_node_release,
)
from phpjs_env.core.services.host_setup.execution.subprocess_runner import (  # noqa: F401
    CommandRunner,
)
from phpjs_env.core.services.host_setup.execution.user_tools import (  # noqa: F401
    configure_git,
    install_playwright,
    install_pnpm,
)
