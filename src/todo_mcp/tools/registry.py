from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from jsonschema import Draft7Validator

from ..shared.errors import McpError, validation_error
from ..shared.logging import get_logger, log_event
from ..store import TaskStore, completion_rate
from ..validate import validate_arguments
from .defs import TOOL_DEFINITIONS, ToolDefinition

logger = get_logger(__name__)

ToolHandler = Callable[[Dict[str, Any]], Dict[str, Any]]

for _definition in TOOL_DEFINITIONS:
    Draft7Validator.check_schema(_definition.input_schema)

TOOL_SCHEMAS: Dict[str, Dict[str, Any]] = {tool.name: tool.input_schema for tool in TOOL_DEFINITIONS}


def _make_tool_result(text: str, is_error: bool = False) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


def _trimmed_text(args: Dict[str, Any]) -> str:
    # minLength is checked before trimming, so whitespace-only text gets through the validator
    text = args["text"].strip()
    if not text:
        raise validation_error("Parameter 'text' must be at least 1 characters")
    return text


@dataclass
class Tool:
    definition: ToolDefinition
    handler: ToolHandler


class ToolRegistry:
    """Dispatches validated ``tools/call`` requests onto a :class:`TaskStore`."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._tools: Dict[str, Tool] = {}
        self._register_defaults()

    def _register(self, name: str, handler: ToolHandler) -> None:
        definition = next((d for d in TOOL_DEFINITIONS if d.name == name), None)
        if definition is None:
            raise ValueError(f"No definition for tool: {name}")
        self._tools[name] = Tool(definition=definition, handler=handler)

    def _register_defaults(self) -> None:
        self._register("create_task", self._tool_create_task)
        self._register("get_tasks", self._tool_get_tasks)
        self._register("update_task", self._tool_update_task)
        self._register("complete_task_by_text", self._tool_complete_task_by_text)
        self._register("analyze_tasks", self._tool_analyze_tasks)
        self._register("delete_task", self._tool_delete_task)
        self._register("clear_all_tasks", self._tool_clear_all_tasks)

    def list_tools(self) -> List[Dict[str, Any]]:
        return [tool.definition.to_dict() for tool in self._tools.values()]

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        try:
            tool = self._tools.get(name)
            if tool is None:
                raise validation_error(f"Tool {name} not found")
            validate_arguments(name, arguments, TOOL_SCHEMAS)
            result = tool.handler(arguments)
        except McpError as exc:
            log_event(logger, logging.ERROR, f"Tool execution failed: {name}", tool=name, parameters=arguments, error=exc.to_dict())
            raise
        log_event(logger, logging.INFO, f"Tool executed: {name}", tool=name, parameters=arguments)
        return result

    def _tool_create_task(self, args: Dict[str, Any]) -> Dict[str, Any]:
        task = self._store.new_task(_trimmed_text(args))
        self._store.add(task)
        log_event(logger, logging.INFO, "Task created", task=task.to_dict())
        return _make_tool_result(f'Task created successfully: "{task.text}"')

    def _tool_get_tasks(self, args: Dict[str, Any]) -> Dict[str, Any]:
        status = args["filter"]
        tasks = self._store.filter(status)
        return _make_tool_result(f"Retrieved {len(tasks)} tasks (filter: {status})")

    def _tool_update_task(self, args: Dict[str, Any]) -> Dict[str, Any]:
        task_id = args["id"]
        completed = args["completed"]
        if self._store.find_by_id(task_id) is None:
            raise validation_error(f"Task with ID {task_id} not found")
        task = self._store.update(task_id, completed=completed)
        log_event(logger, logging.INFO, "Task updated", task=task.to_dict())
        state = "completed" if completed else "marked as pending"
        return _make_tool_result(f'Task "{task.text}" {state}')

    def _tool_complete_task_by_text(self, args: Dict[str, Any]) -> Dict[str, Any]:
        text = args["text"]
        needle = _trimmed_text(args).lower()
        matches = [t for t in self._store.filter("pending") if needle in t.text.lower()]
        if not matches:
            raise validation_error(f'No pending tasks found containing "{text}"')
        if len(matches) > 1:
            listing = "\n".join(f"- {t.text}" for t in matches)
            raise validation_error(f'Multiple tasks found containing "{text}". Please be more specific:\n{listing}')
        task = self._store.update(matches[0].id, completed=True)
        log_event(logger, logging.INFO, "Task completed by text search", task=task.to_dict(), search_text=needle)
        return _make_tool_result(f'Task "{task.text}" marked as completed')

    def _tool_analyze_tasks(self, args: Dict[str, Any]) -> Dict[str, Any]:
        stats = self._store.analytics()
        kind = args["analysis_type"]
        if kind == "summary":
            text = (
                f"Task Summary: {stats['total']} total tasks, "
                f"{stats['completed']} completed, {stats['pending']} pending"
            )
        elif kind == "progress":
            text = f"Progress: {completion_rate(stats['completed'], stats['total'])}% completion rate"
        elif stats["pending"] > 0:
            text = f"Suggestions: You have {stats['pending']} pending tasks. Consider prioritizing them."
        else:
            text = "Great job! All tasks are completed."
        return _make_tool_result(text)

    def _tool_delete_task(self, args: Dict[str, Any]) -> Dict[str, Any]:
        task_id = args["id"]
        task = self._store.delete(task_id)
        if task is None:
            raise validation_error(f"Task with ID {task_id} not found")
        log_event(logger, logging.INFO, "Task deleted", task=task.to_dict())
        return _make_tool_result(f'Task "{task.text}" deleted successfully')

    def _tool_clear_all_tasks(self, _: Dict[str, Any]) -> Dict[str, Any]:
        cleared = self._store.count()
        self._store.clear_all()
        log_event(logger, logging.INFO, "All tasks cleared", count=cleared)
        return _make_tool_result(f"Cleared {cleared} tasks from the todo list")
