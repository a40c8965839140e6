"""Static server identity and tool catalog advertised over JSON-RPC."""

from __future__ import annotations

from project_rules import __version__

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "project-rules"
SERVER_DESCRIPTION = "Vue 3 + Vuetify project rules and code validation"

GET_PROJECT_RULES = "get_project_rules"
VALIDATE_CODE = "validate_code"
GET_QUICK_PROMPT = "get_quick_prompt"

TOOLS: list[dict] = [
    {
        "name": GET_PROJECT_RULES,
        "description": "Get Vue 3 + Vuetify project development rules and guidelines",
        "inputSchema": {
            "type": "object",
            "properties": {
                "section": {
                    "type": "string",
                    "description": "Specific section to retrieve (composition-api, styling, reusability, all)",
                    "enum": ["composition-api", "styling", "reusability", "examples", "all"],
                },
            },
        },
    },
    {
        "name": VALIDATE_CODE,
        "description": "Validate code against project rules and provide suggestions",
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "The code to validate",
                },
                "type": {
                    "type": "string",
                    "description": "Type of code (vue, css, js)",
                    "enum": ["vue", "css", "js"],
                    "default": "vue",
                },
            },
            "required": ["code"],
        },
    },
    {
        "name": GET_QUICK_PROMPT,
        "description": "Get the quick reference prompt for immediate use",
        "inputSchema": {
            "type": "object",
            "properties": {},
        },
    },
]


def initialize_result() -> dict:
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {"tools": {}},
        "serverInfo": {
            "name": SERVER_NAME,
            "version": __version__,
            "description": SERVER_DESCRIPTION,
        },
    }
