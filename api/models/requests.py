# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request models for API endpoints.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CalculateTermsRequest(BaseModel):
    """Request body of POST /calcular."""

    model_config = ConfigDict(extra='ignore')

    tipoAccion: Optional[str] = Field(None, description="Action type code, e.g. PETICION")
    fechaInicial: Optional[str] = Field(
        None,
        description="Start date in YYYY-MM-DD; invalid or missing values fall back to today"
    )

    @field_validator('tipoAccion', mode='before')
    @classmethod
    def validate_tipo_accion(cls, v: Any):
        """Reject non-text action types instead of coercing them."""
        if v is not None and not isinstance(v, str):
            raise ValueError('tipoAccion must be a string')
        return v

    @field_validator('fechaInicial', mode='before')
    @classmethod
    def drop_non_text_date(cls, v: Any):
        """Non-text dates are ignored like any other invalid date."""
        if not isinstance(v, str):
            return None
        return v

    def has_action_type(self) -> bool:
        return bool(self.tipoAccion)
