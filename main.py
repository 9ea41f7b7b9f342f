"""
Entry point for the HTTP helpers demonstration service.

This module creates the FastAPI application instance and starts the Uvicorn
ASGI server when executed directly.
"""

import uvicorn

import http_helpers.server_factory

fastapi_application = http_helpers.server_factory.create_application()

if __name__ == "__main__":
    import configuration

    application_configuration = configuration.HelpersConfiguration()

    uvicorn.run(
        "main:fastapi_application",
        host=application_configuration.application_host,
        port=application_configuration.application_port,
        reload=True,
    )
