"""
MCP protocol support: tool execution and request proxying.
"""
