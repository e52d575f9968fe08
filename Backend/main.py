from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from catalog.api import index, releases
from catalog.core.config import settings
import traceback
import logging
import uvicorn # For running programmatically
import os



# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("catalog")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

app = FastAPI(title="Catalog API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Data-source failures end up here: one 500 for the whole request
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    error_detail = traceback.format_exc()
    logger.error(f"Unhandled exception: {str(exc)}\n{error_detail}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": str(exc),
            "path": request.url.path
        }
    )

# Include routes
app.include_router(releases.router, prefix="/api", tags=["API"])
app.include_router(index.router, tags=["Index"])


@app.get("/")
async def root():
    return {"message": "Welcome to the Catalog API"}


@app.get("/up")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, log_level="info")
