# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/__init__.py

Jobs programados usando APScheduler (reaper de generaciones).

Autor: Adlibify
Fecha: 2026-10-19
"""

from .scheduler_service import SchedulerService, get_scheduler

__all__ = [
    "SchedulerService",
    "get_scheduler",
]
