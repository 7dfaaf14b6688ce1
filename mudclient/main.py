from fastapi import FastAPI

from .patterns import expand_speedwalk
from .schemas import SpeedwalkResponse
from .logger import get_logger

logger = get_logger("main")

app = FastAPI()


@app.get("/api/speedwalk", response_model=SpeedwalkResponse)
def speedwalk(path: str, backwards: bool = False):
    """Expande um speedwalk (o cliente web mostra o caminho antes de andar)."""
    steps = expand_speedwalk(path, backwards)
    logger.debug(f"Speedwalk '{path[:30]}' -> {len(steps)} passos")
    return SpeedwalkResponse(steps=steps)


# ============================================================================
# HEALTH CHECK
# ============================================================================

@app.get("/health")
def health_check():
    """Health check público, usado por monitores externos."""
    return {"status": "ok"}
