"""
GrowthNav MCP Server - Model Context Protocol server for conversion tracking.

Exposes the tracking pipeline to MCP clients:
- GTM tools (compile export to config, analyze export)
- Tracking tools (config lookup, live event processing)

Usage:
    # Via CLI
    growthnav-mcp

    # Via Python
    from growthnav_mcp import server
    server.main()
"""

__version__ = "0.1.0"
