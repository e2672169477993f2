"""Fixed query commands group members can post to get a report."""

from __future__ import annotations

from dataclasses import dataclass

from src.records.models import DELEGATE, PRINCIPAL, RELAY, STATEMENT, TASK
from src.records.store import ALL


@dataclass(frozen=True)
class QueryCommand:
    name: str
    kind_filter: str
    speaker_filter: str


LIST_ALL = QueryCommand("list-all", ALL, ALL)
LIST_TASKS = QueryCommand("list-tasks", TASK, ALL)
LIST_STATEMENTS = QueryCommand("list-statements", STATEMENT, ALL)
LIST_PRINCIPAL = QueryCommand("list-principal", ALL, PRINCIPAL)
LIST_DELEGATE = QueryCommand("list-delegate", ALL, DELEGATE)
LIST_RELAY = QueryCommand("list-relay", ALL, RELAY)

# Exact phrases (after trimming). English matching ignores case.
_PHRASES: dict[QueryCommand, tuple[str, ...]] = {
    LIST_ALL: ("all records", "record list", "記錄列表", "全部記錄"),
    LIST_TASKS: ("task list", "task records", "任務記錄", "任務列表"),
    LIST_STATEMENTS: ("statement list", "statement records", "發言記錄"),
    LIST_PRINCIPAL: ("chairman records", "葛董記錄", "董事長記錄"),
    LIST_DELEGATE: ("delegate records", "代理人記錄", "總經理記錄", "特助記錄"),
    LIST_RELAY: ("relay records", "轉達記錄", "其他人記錄"),
}

COMMANDS: dict[str, QueryCommand] = {
    phrase.casefold(): command
    for command, phrases in _PHRASES.items()
    for phrase in phrases
}


def match_command(text: str) -> QueryCommand | None:
    """Return the query command *text* names, or None for ordinary messages."""
    return COMMANDS.get(text.strip().casefold())
