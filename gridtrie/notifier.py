import logging
from collections import defaultdict

import httpx

logger = logging.getLogger("gridtrie")


def format_message(matches: list[str], grid: list[list[str]]) -> tuple[str, str]:
    """Build (title, body): matches grouped by length, then a per-length count line."""
    rows, cols = len(grid), len(grid[0]) if grid else 0
    title = f"Grid {rows}x{cols} - {len(matches)} matches"

    by_length: dict[int, list[str]] = defaultdict(list)
    for m in dict.fromkeys(matches):
        by_length[len(m)].append(m)

    lines = [",".join(by_length[length]) for length in sorted(by_length)]
    counts = " | ".join(f"{l}L:{len(g)}" for l, g in sorted(by_length.items()))
    body = "\n".join(lines) + "\n\n" + counts if by_length else "No matches"
    return title, body


async def send_notification(
    matches: list[str],
    grid: list[list[str]],
    timings: dict,
    topic: str,
    ntfy_url: str = "https://ntfy.sh",
    transport: httpx.AsyncBaseTransport | None = None,
):
    """Send query results to ntfy.sh. Best-effort: failures are logged, not raised."""
    title, body = format_message(matches, grid)
    total = timings.get("total")
    if total is not None:
        body += f"\n{total}ms"

    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={"Title": title, "Tags": "mag"},
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)
    except httpx.HTTPError as e:
        logger.error("Failed to send notification: %s", e)
