from __future__ import annotations

from visitormap.config.settings import get_settings
from dotenv import load_dotenv

load_dotenv()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "visitormap.server.core:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        workers=settings.api.workers,
        log_level=settings.api.log_level.lower(),
    )
