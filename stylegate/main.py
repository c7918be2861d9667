from fastapi import FastAPI

from stylegate.api.checkstyle_routes import router as checkstyle_router
from stylegate.core.logging import setup_logging

__version__ = "0.1.0"

setup_logging()

tags_metadata = [
    {
        "name": "checkstyle",
        "description": "Run Checkstyle per build context, apply XSLT rules to its report and gate on severity.",
    },
    {"name": "health", "description": "Liveness probe."},
]

app = FastAPI(title="stylegate", version=__version__, openapi_tags=tags_metadata)
app.include_router(checkstyle_router)


@app.get("/health", tags=["health"], summary="Health check")
def health() -> dict:
    return {"status": "healthy", "version": __version__}
