"""House Plants CLI — main entry point for `houseplants`."""


def main():
    """Start the House Plants API server."""
    import uvicorn
    from houseplants.core.config import get_settings

    settings = get_settings()

    print("House Plants API")
    print(f"   Starting on http://{settings.host}:{settings.port}{settings.api_prefix}")
    print(f"   API Docs:  http://{settings.host}:{settings.port}/docs")
    print("")

    uvicorn.run(
        "houseplants.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
