"""
Special function for running API endpoint server locally whenever required.

Simply run python run_server_local.py in the terminal to launch the server
and begin hosting the swagger UI at `http://0.0.0.0:8001/docs`
"""
import uvicorn
import signal
import sys

from career_studio.config import APP_DEFAULTS

def main():
    # Use Uvicorn programmatically for proper cleanup on Ctrl+C.
    # No reload: all state lives in memory and a reload would wipe it.
    config = uvicorn.Config(
        "api.server:app",
        host=APP_DEFAULTS.SERVER_HOST,
        port=APP_DEFAULTS.SERVER_PORT,
    )
    server = uvicorn.Server(config)

    def handle_exit(sig, frame):
        print("\nShutting down gracefully...")
        # This triggers Uvicorn's graceful shutdown
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)

    server.run()
    print("Server stopped cleanly.")

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nKeyboard interrupt received. Exiting...")
        sys.exit(0)
