from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cookmate.config import get_settings
from cookmate.database import Database
from cookmate.errors import CookMateError
from cookmate.logging_config import configure_logging
from cookmate.routers import auth, preferences, recipes, ratings, grocery, import_export
from cookmate.services.email import EmailClient

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    app.state.database = Database(settings.DATABASE_URL)
    app.state.email_client = EmailClient.from_settings(settings)
    yield
    app.state.database.dispose()


app = FastAPI(
    title="CookMate API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Build allowed origins list (supports comma-separated FRONTEND_URL for multiple domains)
_origins = ["http://localhost:8081"]
for origin in settings.FRONTEND_URL.split(","):
    origin = origin.strip()
    if origin and origin not in _origins:
        _origins.append(origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def cookmate_error_handler(request: Request, exc: CookMateError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, **exc.extra},
    )


app.add_exception_handler(CookMateError, cookmate_error_handler)

app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(preferences.router, prefix="/api/v1/preferences", tags=["Preferences"])
app.include_router(recipes.router, prefix="/api/v1/recipes", tags=["Recipes"])
app.include_router(ratings.router, prefix="/api/v1/ratings", tags=["Ratings"])
app.include_router(grocery.router, prefix="/api/v1/grocery", tags=["Grocery"])
app.include_router(import_export.router, prefix="/api/v1/import", tags=["Import"])


@app.get("/health")
def health():
    return {"status": "ok"}
