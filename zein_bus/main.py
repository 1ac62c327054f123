import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from zein_bus.config import settings
from zein_bus.logging_config import setup_logging
from zein_bus.backend.errors import BackendError
from zein_bus.auth import router as auth_router
from zein_bus.areas import router as areas_router
from zein_bus.bookings import router as bookings_router

logger = logging.getLogger(__name__)

def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Bus trip booking for university commuters",
        debug=settings.DEBUG,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BackendError)
    async def backend_error_handler(request: Request, exc: BackendError):
        """Backend failures are relayed with the backend's own message"""
        if exc.is_unauthorized:
            status_code = status.HTTP_401_UNAUTHORIZED
        elif exc.status_code == status.HTTP_404_NOT_FOUND:
            status_code = status.HTTP_404_NOT_FOUND
        else:
            status_code = status.HTTP_502_BAD_GATEWAY
        logger.warning("%s %s failed at backend: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    app.include_router(
        auth_router.router,
        prefix=f"{settings.API_V1_STR}/auth",
        tags=["Authentication"]
    )

    app.include_router(
        areas_router.router,
        prefix=f"{settings.API_V1_STR}/areas",
        tags=["Areas & Universities"]
    )

    app.include_router(
        bookings_router.router,
        prefix=f"{settings.API_V1_STR}/bookings",
        tags=["Bookings"]
    )

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
