#!/usr/bin/env python3
"""
Quick launcher for databricks-mcp-server from a source checkout.

Usage:
    python run.py --help
    python run.py <databricks-mcp-server arguments>
"""

import sys

from databricks_mcp_server.launcher import main

if __name__ == "__main__":
    sys.exit(main())
