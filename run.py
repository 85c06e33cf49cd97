import uvicorn

from app.config import settings

# Default settings
HOST = "localhost"
RELOAD = True  # Enable live reload in local development

# Production config
if settings.ENV.lower() == "prod":
    HOST = "0.0.0.0"
    RELOAD = False  # Disable reload in production

# Start the FastAPI app
if __name__ == "__main__":
    uvicorn.run("app.main:app", host=HOST, port=settings.PORT, reload=RELOAD)
