from fastapi import FastAPI, Depends, HTTPException, status
from sqlmodel import Session
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from fastapi.middleware.cors import CORSMiddleware
from store_locator.core import limiter
from store_locator.core.security import authenticate, ensure_admin_user, rotate_api_key
from store_locator.database import create_db_and_tables, get_session, engine
from store_locator.api import locations_router, admin_locations_router
from store_locator.logger import logging


app = FastAPI(title="Store Locator API")

# Setup rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Setup CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create tables on startup
@app.on_event("startup")
def on_startup():
    create_db_and_tables()
    logging.info("Database tables created.")
    with Session(engine) as session:
        ensure_admin_user(session)


# Include routers
app.include_router(
    locations_router,
    prefix="/locations",
    tags=["Locations"]
)
app.include_router(
    admin_locations_router,
    prefix="/admin/locations",
    tags=["Admin"]
)

@app.post("/generate-api-key")
def generate_api_key(
    username: str,
    password: str,
    session: Session = Depends(get_session)
):
    user = authenticate(session, username, password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )
    return {"api_key": rotate_api_key(session, user)}

@app.get("/")
def read_root():
    return {"message": "Welcome to Store Locator API"}
