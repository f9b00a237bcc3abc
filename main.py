#!/usr/bin/env python3
"""
Main entry point for NewsCat Gateway when running locally.
This file allows running the gateway directly from the project root.
"""

import sys
from pathlib import Path

# Add the src directory to Python path
src_dir = Path(__file__).parent / "src"
sys.path.insert(0, str(src_dir))


def main():
    """Run the NewsCat Gateway server."""
    import uvicorn
    from newscat_gateway.core.config import settings
    from newscat_gateway.core.logging import setup_logging
    from newscat_gateway.main import app

    setup_logging(settings)

    print("Starting NewsCat Gateway locally...")
    print(f"Access at: http://localhost:{settings.PORT}")
    print(f"Health check: http://localhost:{settings.PORT}/health")
    print(f"API info: http://localhost:{settings.PORT}/api")

    uvicorn.run(
        app,
        host="127.0.0.1",
        port=settings.PORT,
        log_level="debug",
        reload=False  # Disable reload for debugging
    )


if __name__ == "__main__":
    main()
