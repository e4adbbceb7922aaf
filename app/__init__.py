# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal 'app' del backend Adlibify.

Autor: Adlibify
Fecha: 2026-10-19
"""

# Fin del archivo backend/app/__init__.py
