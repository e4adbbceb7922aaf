# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/services/__init__.py

Servicios de billing: inicio de checkout y verificación de pagos.
"""

from .checkout_service import CheckoutService
from .verification_service import PaymentVerificationService, VerificationResult

__all__ = [
    "CheckoutService",
    "PaymentVerificationService",
    "VerificationResult",
]
