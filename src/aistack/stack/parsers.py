"""Parsers for the output of compose, docker and supabase commands.

Each parser turns raw text into typed values so the status logic never
handles tool output directly.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

LINKED_PROJECT_MARKER = "●"


@dataclass(frozen=True)
class ComposeServiceState:
    """One service record from ``docker compose ps --format json``."""

    service: str
    state: str

    @property
    def running(self) -> bool:
        return self.state == "running"


@dataclass(frozen=True)
class LinkedProject:
    """The project currently linked to the local Supabase CLI."""

    org_id: str
    project_id: str
    name: str


def _record_to_state(record: object) -> Optional[ComposeServiceState]:
    if not isinstance(record, dict):
        return None
    service = record.get("Service")
    if not isinstance(service, str) or not service:
        return None
    return ComposeServiceState(service=service, state=str(record.get("State", "")))


def parse_compose_ps(text: str) -> list[ComposeServiceState]:
    """Parse compose ps JSON output.

    Accepts JSON lines (one object per line) as well as a single JSON
    array. Lines that are not valid JSON are skipped.
    """
    stripped = text.strip()
    if not stripped:
        return []

    if stripped.startswith("["):
        try:
            records = json.loads(stripped)
        except json.JSONDecodeError as e:
            logger.debug(f"Unparseable compose ps array: {e}")
            return []
        if not isinstance(records, list):
            return []
    else:
        records = []
        for line in stripped.splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                logger.debug(f"Skipping unparseable compose ps line: {line[:80]}")

    states = []
    for record in records:
        state = _record_to_state(record)
        if state is not None:
            states.append(state)
    return states


def parse_container_names(text: str) -> list[str]:
    """Parse newline-delimited container names."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_projects_list(text: str) -> Optional[LinkedProject]:
    """Find the linked project in ``supabase projects list`` output.

    The linked row carries a bullet in its first column, followed by
    org id, project id and name columns separated by pipes.
    """
    for line in text.splitlines():
        if LINKED_PROJECT_MARKER not in line:
            continue
        parts = [p.strip() for p in line.split("|")]
        if len(parts) >= 4:
            return LinkedProject(org_id=parts[1], project_id=parts[2], name=parts[3])
    return None
