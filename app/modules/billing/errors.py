# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/errors.py

Errores de dominio de checkout y verificación de pagos.

Cada motivo de rechazo de verify-payment tiene su propio error_code para
que el frontend pueda distinguir "pago pendiente" de "sesión inválida".

Autor: Adlibify
Fecha: 2026-10-19
"""

from app.shared.errors import DomainError, NotFoundError, UpstreamError, ValidationError


class PaymentsNotConfiguredError(DomainError):
    status_code = 503
    error_code = "payments_not_configured"
    default_message = "Payments are not configured"


class InvalidPackError(ValidationError):
    error_code = "invalid_pack"
    default_message = "Unknown credit pack"


class PaymentVerificationError(DomainError):
    """Base de los rechazos de verify-payment."""

    status_code = 400
    error_code = "payment_verification_failed"
    default_message = "Payment could not be verified"


class PaymentNotCompletedError(PaymentVerificationError):
    error_code = "payment_not_completed"
    default_message = "Payment not completed"


class MissingMetadataError(PaymentVerificationError):
    error_code = "missing_metadata"
    default_message = "Missing metadata in checkout session"


class UnknownPriceError(PaymentVerificationError):
    error_code = "unknown_price"
    default_message = "Unknown price ID"


class SessionOwnerMismatchError(PaymentVerificationError):
    status_code = 403
    error_code = "session_owner_mismatch"
    default_message = "Checkout session belongs to another user"


class BillingProfileNotFoundError(NotFoundError):
    error_code = "profile_not_found"
    default_message = "Profile not found"


class PaymentProviderError(UpstreamError):
    error_code = "provider_error"
    default_message = "Payment provider error"


__all__ = [
    "PaymentsNotConfiguredError",
    "InvalidPackError",
    "PaymentVerificationError",
    "PaymentNotCompletedError",
    "MissingMetadataError",
    "UnknownPriceError",
    "SessionOwnerMismatchError",
    "BillingProfileNotFoundError",
    "PaymentProviderError",
]
