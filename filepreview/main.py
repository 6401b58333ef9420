from __future__ import annotations

import os

from fastapi import FastAPI

from filepreview.api.handlers import router as api_router


def create_app() -> FastAPI:
    app = FastAPI(title="File Preview API", version="1.0.0")
    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "filepreview.main:app",
        host=os.getenv("UVICORN_HOST", "0.0.0.0"),
        port=int(os.getenv("UVICORN_PORT", "8000")),
        reload=os.getenv("UVICORN_RELOAD", "false").lower() == "true",
    )
