"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_cart.main:app --reload

    # Or through the installed console script
    recipe-cart
"""

from recipe_cart.factory import create_app


app = create_app()


def run() -> None:
    """Run the server with the configured host and port."""
    import uvicorn

    from recipe_cart.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "recipe_cart.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
