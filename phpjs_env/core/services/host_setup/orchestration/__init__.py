"""
L5 Orchestration — prompts, the preflight report and the ordered host procedure.
"""

from phpjs_env.core.services.host_setup.orchestration.procedure import (  # noqa: F401
    SetupProcedure,
)
from phpjs_env.core.services.host_setup.orchestration.prompter import (  # noqa: F401
    ClickPrompter,
    Prompter,
)
from phpjs_env.core.services.host_setup.orchestration.preflight import (  # noqa: F401
    run_preflight,
)
