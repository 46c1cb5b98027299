"""
Domain models — Pydantic types for the environment bootstrap.

All models are re-exported here for convenient access:

    from phpjs_env.core.models import SetupSettings, WorkspaceDescriptor, GeneratedFile
"""

from phpjs_env.core.models.descriptor import (
    ContainerDescriptor,
    PreviewProcess,
    WorkspaceDescriptor,
)
from phpjs_env.core.models.settings import SetupAnswers, SetupConfig, SetupSettings
from phpjs_env.core.models.step import StepResult
from phpjs_env.core.models.template import GeneratedFile

__all__ = [
    # descriptor.py
    "ContainerDescriptor",
    # template.py
    "GeneratedFile",
    "PreviewProcess",
    # settings.py
    "SetupAnswers",
    "SetupConfig",
    "SetupSettings",
    # step.py
    "StepResult",
    "WorkspaceDescriptor",
]
