import os
import sys
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool

from .config import ConfigError, Settings, load_settings
from .models import DEFAULT_MODEL, LocalFailure, UpstreamError
from .upstream import UpstreamClient, assistant_message, build_payload, parse_completion

logger = logging.getLogger("chat_relay")


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(title="Chat Relay")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    upstream = UpstreamClient(settings)
    app.state.upstream = upstream

    @app.post("/api/chat")
    async def chat(request: Request):
        try:
            try:
                body = await request.json()
            except ValueError:
                body = None

            messages = body.get("messages") if isinstance(body, dict) else None
            if not isinstance(messages, list):
                return JSONResponse(status_code=400, content={"error": "messages array required"})

            payload = build_payload(messages, body.get("model", DEFAULT_MODEL))
            logger.info("Chat: model=%s messages=%d", payload["model"], len(messages))

            # requests blocks; keep it off the event loop
            result = await run_in_threadpool(upstream.complete, payload)

            if isinstance(result, UpstreamError):
                if result.content_type:
                    # keep the upstream header as-is so it still matches the bytes
                    return Response(
                        content=result.body,
                        status_code=result.status_code,
                        headers={"Content-Type": result.content_type},
                    )
                return Response(content=result.body, status_code=result.status_code, media_type="text/plain")
            if isinstance(result, LocalFailure):
                logger.error("Chat relay failed: %s", result.message, exc_info=result.error)
                return JSONResponse(status_code=500, content={"error": result.message})

            assistant = assistant_message(parse_completion(result.data))
            return JSONResponse(content={"assistant": assistant})
        except Exception as e:
            logger.exception("Chat relay failed")
            return JSONResponse(status_code=500, content={"error": str(e)})

    # Mounted last so /api routes win over the catch-all static mount
    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found, frontend disabled", settings.static_dir)

    return app


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)

    import uvicorn

    app = create_app(settings)
    logger.info("Server listening on http://localhost:%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
