"""
L3 Detection — ``__init__.py`` re-exports all read-only probes.
"""

from phpjs_env.core.services.host_setup.detection.environment import (  # noqa: F401
    command_available,
    dpkg_architecture,
    git_identity_configured,
    is_debian,
    read_os_release,
)
from phpjs_env.core.services.host_setup.detection.preconditions import (  # noqa: F401
    available_disk_gb,
    has_package_manager,
    invoking_user,
    is_elevated,
)
