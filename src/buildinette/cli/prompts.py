"""Terminal prompter backed by Typer."""

from __future__ import annotations

import typer


class TyperPrompter:
    def ask(self, text: str, default: str | None = None) -> str:
        return str(typer.prompt(text, default=default))

    def confirm(self, text: str, default: bool = False) -> bool:
        return typer.confirm(text, default=default)
