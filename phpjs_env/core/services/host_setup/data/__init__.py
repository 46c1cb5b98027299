"""
L0 Data — ``__init__.py`` re-exports all data constants.
"""

from phpjs_env.core.services.host_setup.data.constants import (  # noqa: F401
    COMPOSER_INSTALLER_URL,
    COMPOSER_SIGNATURE_URL,
    DEBIAN_RELEASES,
    DEFAULT_LOG_FILE,
    ELECTRON_OZONE_LINE,
    GAI_PRECEDENCE_LINE,
    HTTP_CONNECT_TIMEOUT,
    MICROSOFT_KEY_URL,
    NODE_RELEASE_INDEX_URL,
    NODESOURCE_KEY_URL,
    PNPM_INSTALL_URL,
    REQUIRED_DISK_GB,
    USER_AGENT,
)
from phpjs_env.core.services.host_setup.data.packages import (  # noqa: F401
    ESSENTIAL_PACKAGES,
    PHP_PACKAGES,
)
