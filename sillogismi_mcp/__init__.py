"""MCP server exposing a sillogismi fact store."""
