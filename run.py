import sys
import asyncio
import uvicorn
from commentcard.config import settings

def main():
    # Playwright needs subprocess support on Windows: force the Proactor loop before uvicorn starts
    if sys.platform == "win32":
        print(" [System] Enforcing WindowsProactorEventLoopPolicy for Playwright compatibility...")
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

    try:
        uvicorn.run(
            "commentcard.main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=False # Reload would spawn a child process without the policy above
        )
    except (KeyboardInterrupt, SystemExit):
        pass

if __name__ == "__main__":
    main()
