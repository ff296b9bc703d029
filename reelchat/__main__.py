"""
ReelChat — Application entry point.

Run with:  python -m reelchat
           uvicorn reelchat.main:app --reload
"""

import uvicorn
from reelchat.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "reelchat.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level,
        reload=True,
    )
