"""Domain model for the JSON templates shipped with the CLI."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

from tsbootstrap.domain.project import BootstrapError

TOKEN_PATTERN = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")

TSCONFIG_TEMPLATE = "tsconfig-template.json"
PACKAGE_TEMPLATE = "package-template.json"

APP_NAME_TOKEN = "appName"
NODE_TYPES_VERSION_TOKEN = "nodeTypesVersion"
TYPESCRIPT_VERSION_TOKEN = "typescriptVersion"

# Tokens each template is rendered with; templates mapped to no tokens are
# copied verbatim.
TEMPLATE_TOKENS: Mapping[str, tuple[str, ...]] = {
    TSCONFIG_TEMPLATE: (),
    PACKAGE_TEMPLATE: (APP_NAME_TOKEN, NODE_TYPES_VERSION_TOKEN, TYPESCRIPT_VERSION_TOKEN),
}


class TemplateRenderError(BootstrapError):
    """Raised when a template cannot be rendered with the given values."""


@dataclass(frozen=True)
class TemplateDescriptor:
    name: str
    text: str
    source: str

    def tokens(self) -> list[str]:
        """Return the distinct placeholder names in order of first appearance."""

        seen: list[str] = []
        for match in TOKEN_PATTERN.finditer(self.text):
            if match.group(1) not in seen:
                seen.append(match.group(1))
        return seen

    def render(self, values: Mapping[str, str]) -> str:
        """Substitute every occurrence of every placeholder.

        Placeholders without a value raise ``TemplateRenderError`` so that a
        misspelt token never leaks into the generated file.
        """

        missing = [token for token in self.tokens() if token not in values]
        if missing:
            raise TemplateRenderError(
                f"Template {self.name} has no value for: {', '.join(missing)}"
            )
        return TOKEN_PATTERN.sub(lambda match: str(values[match.group(1)]), self.text)

    def render_for(self, values: Mapping[str, str]) -> str:
        """Render with only the tokens configured for this template."""

        allowed = TEMPLATE_TOKENS.get(self.name, ())
        if not allowed:
            return self.text
        return self.render({token: values[token] for token in allowed if token in values})
