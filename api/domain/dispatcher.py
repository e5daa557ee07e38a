# SPDX-License-Identifier: Apache-2.0

"""
Entry point of the term calculation engine.

Normalizes the raw action type and start date received from the boundary
layer, resolves the rule to apply and returns either a TermResult or an
UnrecognizedActionType result. Unrecognized types are a regular result, not
an exception.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Union

from models.enums import ActionType, LEGACY_ACTION_TYPES
from domain.business_days import is_valid_date_text, parse_date, today_in_colombia
from domain.terms import TERM_RULES, TermResult, apply_rule


@dataclass
class UnrecognizedActionType:
    """Result for an action type with no rule."""
    tipo_recibido: str
    tipos_validos: List[str]

    def to_dict(self) -> Dict[str, str]:
        return {
            "error": f'Tipo de acción "{self.tipo_recibido}" no reconocido',
            "tiposValidos": ", ".join(self.tipos_validos),
        }


def normalize_action_type(text: str) -> str:
    return text.strip().upper()


def valid_action_types(include_legacy: bool = True) -> List[str]:
    """List action codes in declaration order, legacy codes last."""
    current = [tipo.value for tipo in ActionType if tipo not in LEGACY_ACTION_TYPES]
    if not include_legacy:
        return current
    return current + [tipo.value for tipo in ActionType if tipo in LEGACY_ACTION_TYPES]


def resolve_start_date(date_text: Optional[str], now: Optional[datetime] = None) -> str:
    """Use the given date when valid, otherwise today's date in Colombia."""
    if date_text and is_valid_date_text(date_text):
        return date_text
    return today_in_colombia(now)


def find_rule(action_code: str, include_legacy: bool = True):
    """Return the rule for a normalized action code, or None."""
    try:
        tipo = ActionType(action_code)
    except ValueError:
        return None

    if tipo in LEGACY_ACTION_TYPES and not include_legacy:
        return None
    return TERM_RULES[tipo]


def calculate_terms(
    action_type_text: str,
    date_text: Optional[str] = None,
    *,
    include_legacy: bool = True,
    now: Optional[datetime] = None,
) -> Union[TermResult, UnrecognizedActionType]:
    """
    Calculate the statutory terms for an action.

    Args:
        action_type_text: Action code as received, case and padding tolerated
        date_text: Start date in YYYY-MM-DD; invalid or missing means today
        include_legacy: Whether legacy action types are accepted
        now: Clock override used to resolve "today"

    Returns:
        TermResult, or UnrecognizedActionType carrying the original text
    """
    rule = find_rule(normalize_action_type(action_type_text), include_legacy)
    if rule is None:
        return UnrecognizedActionType(
            tipo_recibido=action_type_text,
            tipos_validos=valid_action_types(include_legacy),
        )

    start = parse_date(resolve_start_date(date_text, now), rule.anchor_hour)
    return apply_rule(rule, start)
