# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the calculation dispatcher.
"""

from datetime import datetime, timezone

import pytest

from domain import dispatcher
from domain.terms import TermResult


NOW = datetime(2025, 1, 2, 15, 0, tzinfo=timezone.utc)


class TestActionTypeNormalization:
    """Test action code normalization."""

    @pytest.mark.parametrize("text", ["PETICION", "peticion", " Peticion ", "\tpeticion\n"])
    def test_case_and_whitespace_are_tolerated(self, text):
        """Test trimming and upper-casing."""
        result = dispatcher.calculate_terms(text, "2025-01-02")
        assert isinstance(result, TermResult)
        assert result.to_dict()["tipo"] == "PETICION"

    def test_inner_characters_are_not_rewritten(self):
        """Test that only the ends are trimmed."""
        assert dispatcher.normalize_action_type(" recurso_queja ") == "RECURSO_QUEJA"
        assert dispatcher.normalize_action_type("PETICION INFO") == "PETICION INFO"


class TestUnrecognizedActionType:
    """Test the unrecognized action type result."""

    def test_unknown_type(self):
        """Test payload with the original text and the valid codes."""
        result = dispatcher.calculate_terms("  desconocido ", "2025-01-02")
        assert isinstance(result, dispatcher.UnrecognizedActionType)
        payload = result.to_dict()
        assert payload["error"] == 'Tipo de acción "  desconocido " no reconocido'
        assert payload["tiposValidos"] == ", ".join(dispatcher.valid_action_types())

    def test_legacy_type_rejected_when_disabled(self):
        """Test SILENCIO with legacy types disabled."""
        result = dispatcher.calculate_terms("SILENCIO", "2025-01-04", include_legacy=False)
        assert isinstance(result, dispatcher.UnrecognizedActionType)
        assert "SILENCIO" not in result.to_dict()["tiposValidos"]

    def test_legacy_type_accepted_by_default(self):
        """Test SILENCIO with the default flag."""
        result = dispatcher.calculate_terms("silencio", "2025-01-04")
        assert isinstance(result, TermResult)
        assert result.fechas["fechaReconocimientoSilencio"] == "2025-01-07"


class TestValidActionTypes:
    """Test the list of valid codes."""

    def test_declaration_order_with_legacy_last(self):
        """Test ordering."""
        assert dispatcher.valid_action_types() == [
            "PETICION",
            "PETICION_INFO",
            "CONSULTA",
            "QUEJA",
            "RECLAMO",
            "REPOSICION",
            "APELACION",
            "RECURSO_QUEJA",
            "TUTELA",
            "NULIDAD",
            "NULIDAD_RESTABLECIMIENTO",
            "CUMPLIMIENTO",
            "SILENCIO",
        ]

    def test_without_legacy(self):
        """Test that legacy codes are dropped."""
        codes = dispatcher.valid_action_types(include_legacy=False)
        assert len(codes) == 12
        assert "SILENCIO" not in codes


class TestStartDateResolution:
    """Test fallback to today's date in Colombia."""

    @pytest.mark.parametrize("date_text", [None, "", "2025-02-30", "02/01/2025", "mañana"])
    def test_invalid_dates_fall_back_to_today(self, date_text):
        """Test invalid or missing dates."""
        assert dispatcher.resolve_start_date(date_text, NOW) == "2025-01-02"

    def test_valid_date_is_kept(self):
        """Test that a valid date is used as given."""
        assert dispatcher.resolve_start_date("2024-02-29", NOW) == "2024-02-29"

    def test_calculation_uses_today_when_date_missing(self):
        """Test the clock override reaches the calculation."""
        result = dispatcher.calculate_terms("PETICION", None, now=NOW)
        assert result.fechas["fechaInicial"] == "2025-01-02"
        assert result.fechas["fechaLimiteRespuesta"] == "2025-01-23"

    def test_colombian_day_differs_from_utc_day(self):
        """Test that 02:00 UTC still belongs to the previous day in Colombia."""
        early_utc = datetime(2025, 1, 3, 2, 0, tzinfo=timezone.utc)
        result = dispatcher.calculate_terms("PETICION", "no-es-fecha", now=early_utc)
        assert result.fechas["fechaInicial"] == "2025-01-02"


class TestFindRule:
    """Test rule lookup."""

    def test_known_code(self):
        """Test a known normalized code."""
        rule = dispatcher.find_rule("TUTELA")
        assert rule is not None
        assert rule.tipo.value == "TUTELA"

    def test_lookup_expects_normalized_code(self):
        """Test that lookup itself does not normalize."""
        assert dispatcher.find_rule("tutela") is None

    def test_legacy_code_filtered(self):
        """Test the include_legacy flag."""
        assert dispatcher.find_rule("SILENCIO", include_legacy=False) is None
        assert dispatcher.find_rule("SILENCIO") is not None
