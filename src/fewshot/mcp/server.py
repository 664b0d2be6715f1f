"""MCP server that wraps the few-shot engine.

Exposes two tools over stdio transport:
  - recall_examples: ranked few-shot examples for a task description
  - example_stats: size and make-up of the example corpus

Configure via the same FEWSHOT_* environment variables as the hook.
"""

from __future__ import annotations

from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from fewshot.config import Settings
from fewshot.engine import FewShot
from fewshot.prompt import rendered_examples

# ---------------------------------------------------------------------------
# Engine instance (created lazily so import doesn't trigger side-effects)
# ---------------------------------------------------------------------------

_fewshot: Optional[FewShot] = None


def _get_fewshot() -> FewShot:
    """Return the module-level FewShot instance, creating it on first call."""
    global _fewshot
    if _fewshot is None:
        _fewshot = FewShot(Settings.from_env())
    return _fewshot


# ---------------------------------------------------------------------------
# MCP Server
# ---------------------------------------------------------------------------

mcp = FastMCP(
    name="fewshot",
    instructions=(
        "fewshot holds highly rated past interactions. Use it to pull worked "
        "examples similar to the task at hand before starting on it."
    ),
)


@mcp.tool(
    description=(
        "Find worked examples of similar past tasks. "
        "USE THIS WHEN: you are starting a task and a demonstration of how a "
        "similar one was solved well would help. Describe the task in natural "
        "language. Returns nothing useful for vague queries like 'help'."
    ),
)
def recall_examples(
    query: str,
    limit: int = 3,
    min_rating: Optional[int] = None,
) -> str:
    """Search the corpus for relevant examples."""
    try:
        fs = _get_fewshot()
        limit = max(1, min(limit, 10))
        selection = fs.select(query, max_examples=limit, min_rating=min_rating)
        text = fs.as_prompt(selection)
        if not text:
            return "No relevant examples found."
        fs.record_access(rendered_examples(selection))
        return text
    except Exception as e:
        return f"❌ Failed to recall examples: {e}"


@mcp.tool(description="Summarize the example corpus: counts per task type and average rating.")
def example_stats() -> str:
    """Report corpus statistics."""
    try:
        stats = _get_fewshot().stats()
        lines: List[str] = [
            f"Examples: {stats.total} ({stats.rankable} rankable, {stats.skipped} skipped)",
            f"Average rating: {stats.average_rating:.1f}",
        ]
        for task_type, count in stats.by_task_type.items():
            lines.append(f"  {task_type}: {count}")
        return "\n".join(lines)
    except Exception as e:
        return f"❌ Failed to read stats: {e}"


def run_server() -> None:
    """Start the MCP server with stdio transport."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
