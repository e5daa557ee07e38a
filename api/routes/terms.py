# SPDX-License-Identifier: Apache-2.0

"""
Term calculation endpoints.

This module exposes the deadline calculation engine: POST /calcular computes
the terms of one action and GET /tipos lists the accepted action types.
"""

from flask import request, jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest
import logging

from domain import dispatcher
from domain.business_days import is_valid_date_text
from models.requests import CalculateTermsRequest
from models.responses import (
    ActionTypesResponse, TermResultResponse, UnrecognizedActionTypeResponse, ErrorResponse
)
from middleware.error_handler import (
    MissingFieldException, InvalidFieldException, InvalidJsonException
)
from observability.tracing import trace_calculation, record_calculation_result
from observability.middleware import tag_calculation_request

logger = logging.getLogger(__name__)

terms_tag = Tag(name="Términos", description="Statutory term calculation")
terms_bp = APIBlueprint(
    'terms',
    __name__,
    abp_tags=[terms_tag]
)

MISSING_ACTION_TYPE = "Debe especificar un tipo de acción"
INVALID_ACTION_TYPE = "El campo tipoAccion debe ser un texto"


def _read_json_body() -> dict:
    """
    Read the JSON body, treating absent or non-object bodies as empty.

    Raises:
        InvalidJsonException: If a JSON body cannot be parsed
    """
    if not request.is_json or not request.get_data():
        return {}

    try:
        body = request.get_json()
    except BadRequest as e:
        raise InvalidJsonException(e.description or "Malformed JSON")

    return body if isinstance(body, dict) else {}


def _parse_calculation_request() -> CalculateTermsRequest:
    body = _read_json_body()

    try:
        calculation_request = CalculateTermsRequest(**body)
    except ValidationError:
        raise InvalidFieldException(INVALID_ACTION_TYPE, "tipoAccion")

    if not calculation_request.has_action_type():
        raise MissingFieldException(MISSING_ACTION_TYPE, "tipoAccion")

    return calculation_request


@terms_bp.post(
    '/calcular',
    summary="Calculate the statutory terms of an action",
    responses={"200": TermResultResponse, "400": ErrorResponse, "500": ErrorResponse}
)
def calculate():
    """
    Calculate terms.

    Unrecognized action types are answered with HTTP 200 and a payload holding
    `error` and `tiposValidos`.
    """
    calculation_request = _parse_calculation_request()
    include_legacy = current_app.config.get('INCLUDE_LEGACY_ACTION_TYPES', True)

    fecha_inicial = calculation_request.fechaInicial
    if fecha_inicial and not is_valid_date_text(fecha_inicial):
        logger.debug("Invalid start date, using today", extra={"start_date": fecha_inicial})

    with trace_calculation(calculation_request.tipoAccion, fecha_inicial) as span:
        result = dispatcher.calculate_terms(
            calculation_request.tipoAccion,
            fecha_inicial,
            include_legacy=include_legacy
        )

        if isinstance(result, dispatcher.UnrecognizedActionType):
            payload = UnrecognizedActionTypeResponse(**result.to_dict()).model_dump()
            logger.info(
                "Unrecognized action type",
                extra={"action_type": calculation_request.tipoAccion}
            )
        else:
            payload = result.to_dict()

        record_calculation_result(span, payload)

    tag_calculation_request(
        dispatcher.normalize_action_type(calculation_request.tipoAccion),
        "error" not in payload
    )

    return jsonify(payload)


@terms_bp.get(
    '/tipos',
    summary="List accepted action types",
    responses={"200": ActionTypesResponse}
)
def list_action_types():
    """List accepted action types."""
    include_legacy = current_app.config.get('INCLUDE_LEGACY_ACTION_TYPES', True)
    response = ActionTypesResponse(
        tiposAcciones=dispatcher.valid_action_types(include_legacy)
    )
    return jsonify(response.model_dump())
