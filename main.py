import uvicorn

from neropage.platform.config import settings

if __name__ == "__main__":
    uvicorn.run("neropage.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
