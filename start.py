"""Entry point to run the FastAPI backend."""

import os
from pathlib import Path

# Load .env file FIRST so settings see it
from dotenv import load_dotenv
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)
print(f"✅ Loaded environment from: {env_path}")

import uvicorn


def main():
    print("=" * 50)
    print("Starting Appointment Booking API")
    print("=" * 50)

    port = int(os.environ.get("PORT", "8000"))
    print(f"- API: http://localhost:{port}")
    print(f"- API Docs: http://localhost:{port}/docs")
    print("=" * 50)

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.environ.get("APP_ENV", "development") == "development",
    )


if __name__ == "__main__":
    main()
