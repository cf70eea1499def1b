#!/usr/bin/env python3
"""
Entry point script to run the MCP server
Usage: python run_mcp_server.py
"""
import sys
import asyncio
import logging

from issue_qa_mcp.mcp_server import configure_logging, main

if __name__ == "__main__":
    configure_logging()
    logger = logging.getLogger("run_mcp_server")
    # stdout is reserved for the protocol stream
    logger.info("Starting Issue QA MCP Server...")
    logger.info("Server will communicate via stdio (standard input/output)")
    logger.info("Press Ctrl+C to stop the server")

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error running server: {e}")
        sys.exit(1)
