from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from .shared.errors import McpError, validation_error
from .shared.logging import get_logger, log_event
from .store import TaskStore, completion_rate, format_timestamp

logger = get_logger(__name__)

MIME_JSON = "application/json"


@dataclass(frozen=True)
class ResourceDefinition:
    uri: str
    name: str
    description: str
    mime_type: str = MIME_JSON

    def to_dict(self) -> Dict[str, Any]:
        return {"uri": self.uri, "name": self.name, "description": self.description, "mimeType": self.mime_type}


RESOURCE_DEFINITIONS: List[ResourceDefinition] = [
    ResourceDefinition("todo://tasks", "All Tasks", "Complete list of all tasks with metadata"),
    ResourceDefinition("todo://tasks/pending", "Pending Tasks", "List of incomplete tasks requiring attention"),
    ResourceDefinition("todo://tasks/completed", "Completed Tasks", "List of successfully completed tasks"),
    ResourceDefinition(
        "todo://analytics/summary", "Task Analytics", "Statistical summary of task completion and progress"
    ),
]


class ResourceReader:
    def __init__(self, store: TaskStore) -> None:
        self._store = store

    def list_resources(self) -> List[Dict[str, Any]]:
        return [resource.to_dict() for resource in RESOURCE_DEFINITIONS]

    def read_resource(self, uri: str) -> Dict[str, Any]:
        log_event(logger, logging.INFO, "Resource read", uri=uri)
        try:
            payload = self._snapshot(uri)
        except McpError as exc:
            log_event(logger, logging.ERROR, "Resource error", uri=uri, error=exc.to_dict())
            raise
        return {"contents": [{"uri": uri, "mimeType": MIME_JSON, "text": json.dumps(payload, indent=2)}]}

    def _snapshot(self, uri: str) -> Any:
        if uri == "todo://tasks":
            return [t.to_dict() for t in self._store.all()]
        if uri == "todo://tasks/pending":
            return [t.to_dict() for t in self._store.filter("pending")]
        if uri == "todo://tasks/completed":
            return [t.to_dict() for t in self._store.filter("completed")]
        if uri == "todo://analytics/summary":
            stats = self._store.analytics()
            return {
                "total_tasks": stats["total"],
                "completed_tasks": stats["completed"],
                "pending_tasks": stats["pending"],
                "completion_rate": completion_rate(stats["completed"], stats["total"]),
                "last_updated": format_timestamp(self._store.now()),
            }
        raise validation_error(f"Unknown resource: {uri}")
