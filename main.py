from contextlib import asynccontextmanager

from fastapi import FastAPI

from fleetdata.infrastructure.database import engine, initialize_database
from fleetdata.infrastructure.import_sessions import get_import_session_store
from fleetdata.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on start-up and release resources on shutdown."""

    initialize_database()
    yield
    get_import_session_store().clear()
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(title="fleetdata", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
