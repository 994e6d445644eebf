"""Run the API with uvicorn: python -m socialhub"""
import uvicorn

from socialhub.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "socialhub.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=not settings.is_production,
    )
