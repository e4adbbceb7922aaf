# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/scheduler_service.py

Servicio de programación de tareas periódicas usando APScheduler.

Autor: Adlibify
Fecha: 2026-10-19
"""

import logging
from typing import Optional, Callable
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.executors.asyncio import AsyncIOExecutor
from apscheduler.jobstores.base import JobLookupError

logger = logging.getLogger(__name__)


class SchedulerService:
    """
    Envoltorio sobre AsyncIOScheduler.

    Un solo job store en memoria: los jobs se re-registran en cada arranque
    desde el lifespan de la app.
    """

    def __init__(self):
        job_defaults = {
            'coalesce': True,  # Combinar ejecuciones perdidas
            'max_instances': 1,  # Una instancia por job
            'misfire_grace_time': 30
        }

        self._scheduler = AsyncIOScheduler(
            jobstores={'default': MemoryJobStore()},
            executors={'default': AsyncIOExecutor()},
            job_defaults=job_defaults,
            timezone='UTC'
        )
        self._started = False
        logger.info("SchedulerService inicializado")

    def start(self):
        if not self._started:
            self._scheduler.start()
            self._started = True
            logger.info("SchedulerService iniciado")

    def shutdown(self, wait: bool = True):
        """
        Detiene el scheduler.

        Args:
            wait: Si True, espera a que terminen los jobs en ejecución
        """
        if self._started:
            self._scheduler.shutdown(wait=wait)
            self._started = False
            logger.info("SchedulerService detenido")

    def add_interval_job(
        self,
        func: Callable,
        job_id: str,
        minutes: int = 0,
        seconds: int = 0,
        **kwargs
    ) -> str:
        """
        Agrega (o reemplaza) un job que se ejecuta a intervalos regulares.

        Args:
            func: Corutina o función a ejecutar
            job_id: ID único del job
            minutes: Intervalo en minutos
            seconds: Intervalo en segundos
            **kwargs: Argumentos para func

        Returns:
            ID del job agregado
        """
        self._scheduler.add_job(
            func=func,
            trigger=IntervalTrigger(minutes=minutes, seconds=seconds),
            id=job_id,
            name=job_id,
            replace_existing=True,
            kwargs=kwargs
        )

        logger.info("Job '%s' agregado: cada %sm %ss", job_id, minutes, seconds)
        return job_id

    def remove_job(self, job_id: str) -> bool:
        """Elimina un job. Retorna False si no existía."""
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            logger.warning("Job '%s' no existe", job_id)
            return False
        logger.info("Job '%s' eliminado", job_id)
        return True

    def get_jobs(self) -> list[dict]:
        return [
            {
                'id': job.id,
                'name': job.name,
                'next_run': getattr(job, 'next_run_time', None),  # sin valor hasta que arranca el scheduler
                'trigger': str(job.trigger),
            }
            for job in self._scheduler.get_jobs()
        ]

    def get_job_status(self, job_id: str) -> Optional[dict]:
        job = self._scheduler.get_job(job_id)
        if job is None:
            return None
        return {
            'id': job.id,
            'name': job.name,
            'next_run': getattr(job, 'next_run_time', None),  # sin valor hasta que arranca el scheduler
            'trigger': str(job.trigger),
        }

    @property
    def is_running(self) -> bool:
        """Retorna True si el scheduler está activo."""
        return self._started and self._scheduler.running


# Singleton global del scheduler
_scheduler_instance: Optional[SchedulerService] = None


def get_scheduler() -> SchedulerService:
    """Obtiene la instancia global del scheduler (singleton)."""
    global _scheduler_instance
    if _scheduler_instance is None:
        _scheduler_instance = SchedulerService()
    return _scheduler_instance


# Fin del archivo backend/app/shared/scheduler/scheduler_service.py
