import json
import logging
from datetime import datetime

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from gridtrie.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("gridtrie")


def create_app() -> FastAPI:
    application = FastAPI(title="Grid Trie")

    @application.get("/health")
    async def health():
        return {"status": "ok"}

    @application.post("/solve")
    async def solve(request: Request, background_tasks: BackgroundTasks):
        from gridtrie.metrics import StageTimer
        from gridtrie.notifier import send_notification
        from gridtrie.paths import GridError
        from gridtrie.query import parse_input, solve_grid

        content_type = request.headers.get("content-type", "")
        logger.info("POST /solve content-type=%s", content_type)

        data = await request.body()
        if not data:
            raise HTTPException(400, "Empty request body")
        if len(data) > settings.MAX_UPLOAD_BYTES:
            raise HTTPException(413, f"Body too large (max {settings.MAX_UPLOAD_BYTES} bytes)")

        timer = StageTimer()
        prefix = None
        try:
            with timer.stage("parse"):
                if content_type.startswith("application/json"):
                    grid, queries, prefix = _parse_json_body(data)
                else:
                    # Fallback: raw text in the query/dims/rows format
                    queries, grid = parse_input(data.decode("utf-8"))
            # CPU-bound enumeration runs in the threadpool
            result, trie = await run_in_threadpool(solve_grid, grid, queries, settings, timer)
        except (GridError, UnicodeDecodeError) as e:
            raise HTTPException(400, str(e))

        response = {
            "grid": result.grid,
            "matches": result.matches,
            "match_count": len(result.matches),
            "word_count": result.word_count,
        }
        if prefix is not None:
            with timer.stage("prefix"):
                response["prefix_words"] = trie.find_words_with_prefix(prefix)
        response["processing_time"] = timer.total_ms
        response["stage_timings"] = timer.summary()

        if settings.NOTIFY:
            background_tasks.add_task(
                send_notification, result.matches, result.grid,
                timer.summary(), settings.NTFY_TOPIC, settings.NTFY_URL,
            )

        if settings.DEBUG:
            _save_debug_artifacts(response, result.queries)

        return JSONResponse(response)

    @application.get("/api/settings")
    async def api_get_settings():
        from gridtrie.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from gridtrie.settings import update_settings, get_editable_settings
        try:
            body = await request.json()
        except json.JSONDecodeError:
            raise HTTPException(400, "Body must be a JSON object")
        if not isinstance(body, dict):
            raise HTTPException(400, "Body must be a JSON object")
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _parse_json_body(data: bytes) -> tuple[list[list[str]], list[str], str | None]:
    from gridtrie.paths import GridError

    try:
        body = json.loads(data)
    except json.JSONDecodeError as e:
        raise GridError(f"Invalid JSON: {e}") from None
    if not isinstance(body, dict):
        raise GridError("Body must be a JSON object")

    grid = body.get("grid")
    queries = body.get("queries", [])
    prefix = body.get("prefix")
    if not isinstance(grid, list) or not all(isinstance(row, list) for row in grid):
        raise GridError("'grid' must be a list of rows")
    if not isinstance(queries, list) or not all(isinstance(q, str) for q in queries):
        raise GridError("'queries' must be a list of strings")
    if prefix is not None and not isinstance(prefix, str):
        raise GridError("'prefix' must be a string")
    return grid, queries, prefix


def _save_debug_artifacts(response: dict, queries: list[str]):
    debug_dir = settings.DEBUG_DIR
    debug_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    artifact = {"timestamp": ts, "queries": queries, **response}
    with open(debug_dir / f"{ts}_result.json", "w") as f:
        json.dump(artifact, f, indent=2)

    logger.info("Saved debug artifact to %s", debug_dir / f"{ts}_result.json")


app = create_app()
