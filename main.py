"""
Lead Scoring Engine - Main Entry Point
======================================
Run this file to start the FastAPI server.

Usage:
    python main.py                    # Start server on port 8000 (or $PORT)
    python main.py --port 8080        # Start server on custom port
    python main.py --reload           # Start with auto-reload (dev mode)

API Documentation:
    http://localhost:8000/docs        # Swagger UI
    http://localhost:8000/redoc       # ReDoc
"""

import argparse
import logging

import uvicorn
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from lead_engine.config.settings import LLM_CONFIG, SERVER_CONFIG


def main():
    parser = argparse.ArgumentParser(description="Lead Scoring Engine API Server")
    parser.add_argument(
        "--host",
        type=str,
        default=SERVER_CONFIG["host"],
        help=f"Host to bind the server to (default: {SERVER_CONFIG['host']})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=SERVER_CONFIG["port"],
        help=f"Port to run the server on (default: {SERVER_CONFIG['port']})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=SERVER_CONFIG["log_level"],
        help=f"Logging level (default: {SERVER_CONFIG['log_level']})",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    llm_status = f"Enabled ({LLM_CONFIG['provider']})" if LLM_CONFIG["api_key"] else "Disabled (no API key)"

    print(f"""
╔══════════════════════════════════════════════════════════════╗
║                   LEAD SCORING ENGINE API                    ║
║                      Version 1.0.0                           ║
╠══════════════════════════════════════════════════════════════╣
║  Server:    http://{args.host}:{args.port}
║  Docs:      http://localhost:{args.port}/docs
║  Health:    http://localhost:{args.port}/health
║  LLM:       {llm_status}
╚══════════════════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "lead_engine.api.endpoints:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
