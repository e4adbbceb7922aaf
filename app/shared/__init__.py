# app/shared/__init__.py
"""
Infraestructura compartida: configuración, base de datos, errores,
middlewares, scheduler e integraciones externas.
"""
