"""Domain model for bootstrapped projects and their templates."""

from .project import (
    BootstrapEnvironment,
    BootstrapError,
    InvalidProjectNameError,
    ProjectTarget,
    is_valid_project_name,
)
from .template import TemplateDescriptor, TemplateRenderError

__all__ = [
    "BootstrapEnvironment",
    "BootstrapError",
    "InvalidProjectNameError",
    "ProjectTarget",
    "TemplateDescriptor",
    "TemplateRenderError",
    "is_valid_project_name",
]
