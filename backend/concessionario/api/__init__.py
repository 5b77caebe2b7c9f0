"""
API Routes
Progetto: Concessionario (Gestionale Concessionaria)

Modulo per l'aggregazione dei router versionati.
"""

from concessionario.api.v1 import api_v1_router

# Esportazione router
__all__ = ["api_v1_router"]
