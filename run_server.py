import uvicorn
import os

if __name__ == "__main__":
    host = os.environ.get("PRINCESSIFY_HOST", "0.0.0.0")
    port = int(os.environ.get("PRINCESSIFY_PORT", "8000"))

    print("Starting Princessify API Server...")
    print(f"Docs available at: http://localhost:{port}/docs")

    uvicorn.run(
        "princessify.api.server:app",
        host=host,
        port=port,
        reload=True
    )
