# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/cors.py

CORS con política por ruta: los prefijos en `open_paths` aceptan cualquier
origen; el resto usa la lista de CORS_ORIGINS.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Iterable

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class PathAwareCORSMiddleware:
    def __init__(self, app: ASGIApp, open_paths: Iterable[str] = (), **cors_kwargs) -> None:
        self.open_paths = tuple(open_paths)
        self.open_cors = CORSMiddleware(
            app,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
        self.default_cors = CORSMiddleware(app, **cors_kwargs)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and self.open_paths and scope["path"].startswith(self.open_paths):
            await self.open_cors(scope, receive, send)
            return
        await self.default_cors(scope, receive, send)


__all__ = ["PathAwareCORSMiddleware"]
