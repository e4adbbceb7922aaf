# -*- coding: utf-8 -*-
"""Jobs programados del módulo de generaciones."""

from .reaper_job import (
    GENERATION_REAPER_JOB_ID,
    ReaperResult,
    fail_stuck_generations,
    register_generation_reaper_job,
)

__all__ = [
    "GENERATION_REAPER_JOB_ID",
    "ReaperResult",
    "fail_stuck_generations",
    "register_generation_reaper_job",
]
