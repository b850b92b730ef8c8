"""FastAPI application entrypoint."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.routes import flow_design
from backend.api.routes import media

app = FastAPI(title="Pipe Flow Design API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(flow_design.router, prefix="/flow-design", tags=["flow-design"])
app.include_router(media.router, prefix="/media", tags=["media"])


@app.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    """Simple health endpoint for uptime probes."""
    return {"status": "ok"}
