"""
Main application entry point for the salon booking server.
"""

import uvicorn
from .api.app import create_app

# Create the FastAPI application
app = create_app()

if __name__ == "__main__":
    settings = app.state.services.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
