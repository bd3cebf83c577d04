"""Pending yes/no confirmation for destructive or external actions."""

from __future__ import annotations

from dataclasses import dataclass

from ..types import ConfirmAction


@dataclass(frozen=True)
class PendingConfirm:
    """The single pending-action slot. ``row`` is set for row deletion."""

    action: ConfirmAction
    row: int | None = None

    def prompt(self) -> str:
        if self.action == ConfirmAction.DELETE_ROW:
            row = (self.row or 0) + 1
            return f"Delete row {row}? (y/N)"
        if self.action == ConfirmAction.INSTALL:
            return "Install cchline as the Claude Code status line? (y/N)"
        return "Remove the cchline status line from Claude Code? (y/N)"


def request_delete_row(row: int) -> PendingConfirm:
    return PendingConfirm(ConfirmAction.DELETE_ROW, row=row)


def request_install() -> PendingConfirm:
    return PendingConfirm(ConfirmAction.INSTALL)


def request_uninstall() -> PendingConfirm:
    return PendingConfirm(ConfirmAction.UNINSTALL)
