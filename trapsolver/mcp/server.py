"""MCP server exposing trapsolver as callable tools.

Requires the ``mcp`` package: ``pip install mcp``

Usage:
    python -m trapsolver.mcp
"""

from __future__ import annotations

from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from trapsolver.mcp.tools import (
    EXPRESSION_SYNTAX_INFO,
    format_evaluation,
    format_response,
    format_syntax,
    run_double_integral,
    run_evaluation,
    run_single_integral,
    to_json,
)

mcp_server = Server("trapsolver")

_TOLERANCE_SCHEMA = {
    "type": "number",
    "description": "Stop once the Richardson error estimate is below this",
}
_BUDGET_SCHEMA = {
    "type": "integer",
    "description": "Maximum number of interval doublings",
}


@mcp_server.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(
            name="solve_integral",
            description=(
                "Solve a definite integral of f(x) over [a, b] with the adaptive "
                "trapezoidal rule. Doubles the interval count until the error "
                "estimate is below the tolerance. Returns the value, interval "
                "count, error estimate and refinement history."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "expression": {"type": "string", "description": "Integrand in x, e.g. x^2"},
                    "a": {"type": "number", "description": "Lower limit"},
                    "b": {"type": "number", "description": "Upper limit"},
                    "tolerance": {**_TOLERANCE_SCHEMA, "default": 1e-6},
                    "max_iterations": {**_BUDGET_SCHEMA, "default": 20},
                },
                "required": ["expression", "a", "b"],
            },
        ),
        Tool(
            name="solve_double_integral",
            description=(
                "Solve a double integral of f(x, y) over the rectangle "
                "[a, b] x [c, d] with the adaptive two-dimensional trapezoidal "
                "rule on n x n grids."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "expression": {
                        "type": "string",
                        "description": "Integrand in x and y, e.g. x^2 + y^2",
                    },
                    "a": {"type": "number", "description": "Lower x limit"},
                    "b": {"type": "number", "description": "Upper x limit"},
                    "c": {"type": "number", "description": "Lower y limit"},
                    "d": {"type": "number", "description": "Upper y limit"},
                    "tolerance": {**_TOLERANCE_SCHEMA, "default": 1e-5},
                    "max_iterations": {**_BUDGET_SCHEMA, "default": 10},
                },
                "required": ["expression", "a", "b", "c", "d"],
            },
        ),
        Tool(
            name="evaluate_expression",
            description="Evaluate an expression at a point. Returns NaN when it cannot be evaluated.",
            inputSchema={
                "type": "object",
                "properties": {
                    "expression": {"type": "string"},
                    "x": {"type": "number"},
                    "y": {"type": "number"},
                },
                "required": ["expression", "x"],
            },
        ),
        Tool(
            name="describe_syntax",
            description="List the operators, functions and constants expressions may use.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
    ]


@mcp_server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    if name == "solve_integral":
        result = run_single_integral(
            expression=arguments["expression"],
            a=arguments["a"],
            b=arguments["b"],
            tolerance=arguments.get("tolerance"),
            max_iterations=arguments.get("max_iterations"),
        )
        return [TextContent(type="text", text=format_response(result))]

    if name == "solve_double_integral":
        result = run_double_integral(
            expression=arguments["expression"],
            a=arguments["a"],
            b=arguments["b"],
            c=arguments["c"],
            d=arguments["d"],
            tolerance=arguments.get("tolerance"),
            max_iterations=arguments.get("max_iterations"),
        )
        return [TextContent(type="text", text=format_response(result))]

    if name == "evaluate_expression":
        data = run_evaluation(arguments["expression"], arguments["x"], arguments.get("y"))
        return [TextContent(type="text", text=format_evaluation(data))]

    if name == "describe_syntax":
        return [
            TextContent(
                type="text",
                text=to_json(
                    {
                        "prompt_context": format_syntax(),
                        "data": {"syntax": EXPRESSION_SYNTAX_INFO},
                    },
                ),
            )
        ]

    raise ValueError(f"Unknown tool: {name}")


async def run_server():
    """Run the MCP server with stdio transport."""
    async with stdio_server() as (read_stream, write_stream):
        await mcp_server.run(
            read_stream,
            write_stream,
            mcp_server.create_initialization_options(),
        )
