"""Enums for prompts and the template catalog."""

from __future__ import annotations

from enum import Enum


class PromptKind(str, Enum):
    """Kinds of question the prompt engine can ask."""

    INPUT = "input"
    CONFIRM = "confirm"


class Template(str, Enum):
    """Available project templates. The first member is the default."""

    TEMPLATE = "template"
    API_TEMPLATE = "apitemplate"
    DJS14 = "DJS14Template"

    @classmethod
    def default(cls) -> Template:
        return next(iter(cls))

    @classmethod
    def resolve(cls, name: str) -> Template:
        """Map *name* to a catalog entry, falling back to the default."""
        try:
            return cls(name)
        except ValueError:
            return cls.default()

    @property
    def label(self) -> str:
        labels: dict[Template, str] = {
            Template.TEMPLATE: "Web app",
            Template.API_TEMPLATE: "API server",
            Template.DJS14: "Discord bot",
        }
        return labels[self]

    @property
    def description(self) -> str:
        descriptions: dict[Template, str] = {
            Template.TEMPLATE: "Frontend starter project. Used when no other template matches.",
            Template.API_TEMPLATE: "Backend starter exposing a small HTTP API.",
            Template.DJS14: "discord.js v14 bot skeleton with command handling.",
        }
        return descriptions[self]
