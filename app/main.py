import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.endpoints import auth as auth_endpoints
from app.api.endpoints import users as user_endpoints
from app.api.endpoints import tournaments as tournament_endpoints
from app.api.endpoints import matches as match_endpoints
from app.api.endpoints import dashboard as dashboard_endpoints
from app.core.config import settings
from app.models import create_tables
from app.services.auth_service import auth_events

logger = logging.getLogger(__name__)


def log_auth_event(event, user):
    logger.info("auth event %s for %s", event, user.id if user else "visitor")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    create_tables()
    subscription = auth_events.subscribe(log_auth_event)
    logger.info("%s site started", settings.CLUB_NAME)
    yield
    subscription.unsubscribe()


app = FastAPI(title=f"{settings.CLUB_NAME} Club API", lifespan=lifespan)

app.include_router(auth_endpoints.router, prefix="/auth", tags=["Authentication"])
app.include_router(user_endpoints.router, prefix="/users", tags=["Users"])
app.include_router(tournament_endpoints.router, prefix="/tournaments", tags=["Tournaments"])
app.include_router(match_endpoints.router, prefix="/matches", tags=["Matches"])
app.include_router(dashboard_endpoints.router, prefix="/dashboard", tags=["Dashboard"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
