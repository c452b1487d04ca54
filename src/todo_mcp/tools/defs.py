from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UUID_PATTERN = "^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$"
MAX_TEXT_LENGTH = 500


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name="create_task",
        description="Creates a new task in the todo list with user consent",
        input_schema={
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "minLength": 1,
                    "maxLength": MAX_TEXT_LENGTH,
                    "description": "The text content of the task to create",
                },
            },
            "required": ["text"],
            "additionalProperties": False,
        },
    ),
    ToolDefinition(
        name="get_tasks",
        description="Retrieves the current list of tasks with filtering options",
        input_schema={
            "type": "object",
            "properties": {
                "filter": {
                    "type": "string",
                    "enum": ["all", "pending", "completed"],
                    "description": "Filter tasks by status",
                },
            },
            "required": ["filter"],
            "additionalProperties": False,
        },
    ),
    ToolDefinition(
        name="update_task",
        description="Updates a task completion status with validation using task ID",
        input_schema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "pattern": UUID_PATTERN, "description": "The UUID of the task to update"},
                "completed": {"type": "boolean", "description": "Whether the task is completed"},
            },
            "required": ["id", "completed"],
            "additionalProperties": False,
        },
    ),
    ToolDefinition(
        name="complete_task_by_text",
        description="Marks a task as completed by searching for its text content (supports partial matching)",
        input_schema={
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "minLength": 1,
                    "maxLength": MAX_TEXT_LENGTH,
                    "description": "The text content of the task to mark as completed (supports partial matching)",
                },
            },
            "required": ["text"],
            "additionalProperties": False,
        },
    ),
    ToolDefinition(
        name="analyze_tasks",
        description="Analyzes the current todo list and provides insights",
        input_schema={
            "type": "object",
            "properties": {
                "analysis_type": {
                    "type": "string",
                    "enum": ["summary", "progress", "suggestions"],
                    "description": "Type of analysis to perform",
                },
            },
            "required": ["analysis_type"],
            "additionalProperties": False,
        },
    ),
    ToolDefinition(
        name="delete_task",
        description="Deletes a task from the todo list",
        input_schema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "pattern": UUID_PATTERN, "description": "The UUID of the task to delete"},
            },
            "required": ["id"],
            "additionalProperties": False,
        },
    ),
    ToolDefinition(
        name="clear_all_tasks",
        description="Clears all tasks from the todo list",
        input_schema={"type": "object", "properties": {}, "additionalProperties": False},
    ),
]
