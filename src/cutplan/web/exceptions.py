"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cutplan.application import CutListParseError
from cutplan.application.config import ConfigError


class UnsupportedFormatError(Exception):
    """Raised when requested export format is not supported."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.format_name = format_name
        self.available = available
        super().__init__(
            f"Unsupported format: {format_name}. Available: {', '.join(available)}"
        )


class UnknownStrategyError(Exception):
    """Raised when a request names a sort strategy that does not exist."""

    def __init__(self, strategy: str, available: list[str]) -> None:
        self.strategy = strategy
        self.available = available
        super().__init__(
            f"Unknown strategy: {strategy}. Available: {', '.join(available)}"
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(CutListParseError)
    async def parse_error_handler(
        request: Request, exc: CutListParseError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "parse",
                "details": [{"line_number": exc.line_number, "line": exc.line}],
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": "config",
                "details": [
                    {"path": d.get("path"), "message": d.get("message")}
                    for d in exc.details
                ],
            },
        )

    @app.exception_handler(UnknownStrategyError)
    async def unknown_strategy_handler(
        request: Request, exc: UnknownStrategyError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unknown_strategy",
                "details": {"strategy": exc.strategy, "available": exc.available},
            },
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unsupported_format",
                "details": {"format": exc.format_name, "available": exc.available},
            },
        )
