# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the términos procesales service.
"""

from enum import Enum


class ActionType(str, Enum):
    """Administrative and judicial actions with a computable term."""
    PETICION = "PETICION"
    PETICION_INFO = "PETICION_INFO"
    CONSULTA = "CONSULTA"
    QUEJA = "QUEJA"
    RECLAMO = "RECLAMO"
    REPOSICION = "REPOSICION"
    APELACION = "APELACION"
    RECURSO_QUEJA = "RECURSO_QUEJA"
    TUTELA = "TUTELA"
    NULIDAD = "NULIDAD"
    NULIDAD_RESTABLECIMIENTO = "NULIDAD_RESTABLECIMIENTO"
    CUMPLIMIENTO = "CUMPLIMIENTO"
    # Legacy: recognition window of an already configured silencio positivo
    SILENCIO = "SILENCIO"


LEGACY_ACTION_TYPES = frozenset({ActionType.SILENCIO})
