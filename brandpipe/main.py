from contextlib import asynccontextmanager
from fastapi import FastAPI

from .db import connect_database, close_database, DatabaseConnectionError
from .routers.ingest import router as ingest_router
from .routers.read import router as read_router
from brandpipe.setup_logging import setup_logging

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging() # Init Logging

# --------------------------------------------------------------------
# FastAPI application with lifespan hook
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context runs once at startup and once at shutdown.
    Startup makes sure the document store is reachable and its tables exist;
    a failure is kept on app.state so /healthz can report it.
    """
    app.state.db_ready = False
    app.state.db_error = None
    eng = None
    try:
        eng = connect_database()
        app.state.db_ready = True
    except DatabaseConnectionError as e:
        app.state.db_error = str(e)

    yield

    if eng is not None:
        close_database(eng)

# Create the FastAPI app instance
app = FastAPI(title="Brand normalization pipeline", lifespan=lifespan)

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """
    Simple health probe for monitoring.
    Returns:
      - ok: static True if the app is alive
      - db_ready: True when the document store answered at startup
      - db_error: the connection error message (None if healthy)
    """
    return {
        "ok": True,
        "service": "brandpipe",
        "version": 1,
        "db_ready": bool(getattr(app.state, "db_ready", False)),
        "db_error": getattr(app.state, "db_error", None),
    }

# Register API routers:
app.include_router(ingest_router)
app.include_router(read_router)
