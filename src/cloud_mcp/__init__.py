"""
Mock MCP tool server with a transparent proxy mode.
"""

__version__ = "0.1.0"
