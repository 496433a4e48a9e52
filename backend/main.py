import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from itinerary_editor.api.routes_itinerary import router as itinerary_router
from itinerary_editor.db.session_store import store

from itinerary_editor.core.config_loader import settings


app = FastAPI(
    title=settings.SERVICE_NAME,
    description="Day / time-block itinerary editing with explicit save and cancel",
    version="1.0.0"
)

# -------------------------------------------------------------
# CORS
# -------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # update to frontend domain in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------------------------------------------
# ROUTES
# -------------------------------------------------------------
app.include_router(itinerary_router)


# -------------------------------------------------------------
# ROOT ENDPOINT
# -------------------------------------------------------------
@app.get("/")
def root():
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "env": settings.environment,
        "backend_api": settings.API_BASE_URL,
        "login_path": settings.LOGIN_PATH,
        "open_sessions": store.open_ids(),
    }


# -------------------------------------------------------------
# RUN LOCAL
# -------------------------------------------------------------
if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
