"""
Minimal MCP client for the BigQuery server.

This proves:
- the server can be launched over stdio
- the query tool can be discovered
- the query tool can be called

Run with: python -m scripts.mcp_client_example --project-id <project> "SELECT 1 AS x"
"""

import argparse
import asyncio
import sys

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client


async def main(project_id: str, sql: str) -> None:
    server = StdioServerParameters(
        command=sys.executable,
        args=["-m", "bigquery_mcp", "--project-id", project_id],
    )

    async with stdio_client(server) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()

            # List tools
            tools = await session.list_tools()
            print("TOOLS:", [t.name for t in tools.tools])

            # Call the query tool
            result = await session.call_tool("query", {"sql": sql})
            for item in result.content:
                print("RESULT:", item.text)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--project-id", required=True)
    parser.add_argument("sql", nargs="?", default="SELECT 1 AS x")
    args = parser.parse_args()
    asyncio.run(main(args.project_id, args.sql))
