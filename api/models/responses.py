# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Response models for API endpoints.

Term results carry a different set of milestone fields per action type, so
TermResultResponse accepts extra fields.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Human-readable status")
    version: str = Field(..., description="Application version")


class ActionTypesResponse(BaseModel):
    """Supported action types."""

    tiposAcciones: List[str] = Field(..., description="Accepted action type codes")


class TermResultResponse(BaseModel):
    """Computed terms for an action type."""

    model_config = ConfigDict(extra='allow')

    tipo: str = Field(..., description="Action type code")
    descripcion: str = Field(..., description="Legal description of the terms")
    fundamentoJuridico: str = Field(..., description="Statutory citation")


class UnrecognizedActionTypeResponse(BaseModel):
    """Returned with HTTP 200 when the action type has no rule."""

    error: str = Field(..., description="Error message including the received text")
    tiposValidos: str = Field(..., description="Comma-separated valid codes")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error message")
    campo: Optional[str] = Field(None, description="Offending request field")
    detalle: Optional[str] = Field(None, description="Additional detail")
