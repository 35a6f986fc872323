"""Port definitions for template storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from tsbootstrap.domain.project import BootstrapError
from tsbootstrap.domain.template import TemplateDescriptor


class TemplateNotFoundError(BootstrapError):
    pass


class TemplateRepository(ABC):
    @abstractmethod
    def load(self, name: str) -> TemplateDescriptor:
        """Return the template stored under ``name``."""
