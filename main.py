from waitlist_api.main import app  # noqa: F401
from waitlist_api.platform.config import settings

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("waitlist_api.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
