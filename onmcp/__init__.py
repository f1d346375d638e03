"""0nMCP console - CRM agency sync, MCP orchestration proxy, and catalog API."""
