# SPDX-License-Identifier: Apache-2.0

"""
Statutory term rules per action type.

Each rule is plain data: an ordered list of steps, each computing one named
milestone from the start date or from an earlier milestone with a single
calendar operation. `apply_rule` runs the steps and builds the TermResult.
The rule table is immutable and must cover every ActionType.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from models.enums import ActionType
from domain.business_days import (
    MIDNIGHT_ANCHOR_HOUR,
    NOON_ANCHOR_HOUR,
    add_business_days,
    add_calendar_days,
    add_calendar_months,
    format_date,
    is_business_day,
    next_business_day,
)

START = "inicio"

# Operation name -> (date, amount) -> date
OPERATIONS: Mapping[str, Callable[[datetime, int], datetime]] = MappingProxyType({
    "habiles": lambda fecha, amount: add_business_days(fecha, amount, True),
    "calendario": add_calendar_days,
    "meses": add_calendar_months,
    "siguiente_habil": lambda fecha, amount: next_business_day(fecha),
})


@dataclass(frozen=True)
class TermStep:
    """One milestone: `field = operation(source, amount)`."""
    field: str
    operation: str
    source: str = START
    amount: int = 0
    published: bool = True


@dataclass(frozen=True)
class TermRule:
    """Pipeline and static legal text for one action type."""
    tipo: ActionType
    descripcion: str
    fundamento_juridico: str
    steps: Tuple[TermStep, ...] = ()
    normalize_start: bool = True
    start_field: Optional[str] = "fechaInicial"
    anchor_hour: int = NOON_ANCHOR_HOUR
    legacy: bool = False


@dataclass
class TermResult:
    """Computed milestones for one request."""
    tipo: ActionType
    fechas: Dict[str, str] = field(default_factory=dict)
    descripcion: str = ""
    fundamento_juridico: str = ""

    def to_dict(self) -> Dict[str, str]:
        result = {"tipo": self.tipo.value}
        result.update(self.fechas)
        result["descripcion"] = self.descripcion
        result["fundamentoJuridico"] = self.fundamento_juridico
        return result


# Shared legal text

SILENCIO_POSITIVO = (
    "El silencio administrativo positivo en servicios públicos domiciliarios: "
    "Se configura automáticamente cuando la empresa no responde una PQR en los 15 días hábiles establecidos. "
    "No requiere elevar a escritura pública ni procedimientos especiales. "
    "La empresa debe reconocer sus efectos dentro de las 72 horas siguientes al vencimiento del plazo. "
    "Si la empresa no reconoce los efectos, el usuario puede solicitar sanciones a la Superintendencia. "
    "No opera si hay práctica de pruebas o si el usuario causó la demora."
)

RECURSOS = (
    "El recurso debe presentarse dentro de los 5 días hábiles siguientes a la notificación, "
    "contados desde el mismo día en que se accede al documento (solo aplica para correo electrónico). "
    "La empresa tiene 15 días hábiles para resolverlo, contados desde el mismo día en que se presenta "
    "el recurso, y debe reconocer los efectos del silencio administrativo positivo dentro de las "
    "72 horas siguientes al vencimiento del plazo."
)

LEY_142_ART_158 = "Artículo 158 de la Ley 142 de 1994."

PLAZO_RECLAMACION = (
    "La reclamación puede presentarse dentro de los 5 meses siguientes a la entrega de la factura."
)


def _pqr_description(asunto: str, extra: str = "") -> str:
    prefix = (
        f"El término para responder {asunto} es de 15 días hábiles "
        f"contados desde el mismo día de presentación."
    )
    if extra:
        prefix = f"{prefix} {extra}"
    return f"{prefix} {SILENCIO_POSITIVO}"


PQR_STEPS = (
    TermStep("fechaLimiteRespuesta", "habiles", amount=15),
    TermStep("fechaReconocimientoSilencio", "calendario", "fechaLimiteRespuesta", 3),
)

RECURSO_STEPS = (
    TermStep("fechaLimitePresentacion", "habiles", amount=5),
    TermStep("fechaLimiteDecision", "habiles", "fechaLimitePresentacion", 15),
    TermStep("fechaReconocimientoSilencio", "calendario", "fechaLimiteDecision", 3),
)


def _pqr_rule(tipo: ActionType, asunto: str, extra: str = "") -> TermRule:
    return TermRule(
        tipo=tipo,
        descripcion=_pqr_description(asunto, extra),
        fundamento_juridico=LEY_142_ART_158,
        steps=PQR_STEPS,
    )


def _recurso_rule(tipo: ActionType) -> TermRule:
    return TermRule(
        tipo=tipo,
        descripcion=RECURSOS,
        fundamento_juridico=LEY_142_ART_158,
        steps=RECURSO_STEPS,
    )


_RULES = (
    _pqr_rule(ActionType.PETICION, "un derecho de petición general"),
    _pqr_rule(ActionType.PETICION_INFO, "un derecho de petición de información"),
    _pqr_rule(ActionType.CONSULTA, "una consulta"),
    _pqr_rule(ActionType.QUEJA, "una queja administrativa", PLAZO_RECLAMACION),
    _pqr_rule(ActionType.RECLAMO, "una reclamación", PLAZO_RECLAMACION),
    _recurso_rule(ActionType.REPOSICION),
    # Filed jointly with reposición, under the same window
    _recurso_rule(ActionType.APELACION),
    TermRule(
        tipo=ActionType.RECURSO_QUEJA,
        start_field="fechaRechazoApelacion",
        steps=(TermStep("fechaLimitePresentacionQueja", "habiles", amount=5),),
        descripcion=(
            "El recurso de queja es un mecanismo facultativo, procede cuando las empresas prestadoras "
            "rechazan un recurso de apelación sobre actos de negación, terminación, suspensión, corte o "
            "facturación del servicio. Debe interponerse dentro de los cinco días hábiles siguientes a la "
            "notificación del rechazo, siendo la Superintendencia de Servicios Públicos quien resuelve en "
            "quince días hábiles, plazo que puede suspenderse hasta treinta días por práctica de pruebas. "
            "Opera con efecto devolutivo (no suspende automáticamente el acto impugnado), aunque puede "
            "solicitarse la suspensión en casos de posible daño irreparable, y su resolución puede "
            "confirmar el acto, revocar lo ordenando, revisión de la apelación, o exigir subsanación de "
            "defectos procedimentales."
        ),
        fundamento_juridico=(
            "Ley 142 de 1994 como régimen especial, con aplicación subsidiaria del CPACA "
            "(Ley 1437 de 2011)."
        ),
    ),
    TermRule(
        tipo=ActionType.TUTELA,
        steps=(
            TermStep("fechaLimiteDecision", "habiles", amount=10),
            TermStep("inicioImpugnacion", "siguiente_habil", "fechaLimiteDecision", published=False),
            TermStep("fechaLimiteImpugnacion", "habiles", "inicioImpugnacion", 3),
        ),
        descripcion=(
            "La acción de tutela en el ámbito de servicios públicos colombianos constituye un mecanismo "
            "de protección que procede cuando la prestación o suspensión de servicios vulnera derechos "
            "fundamentales, especialmente en casos de suspensión de servicios esenciales a personas "
            "vulnerables, violación al derecho de petición o irregularidades administrativas. Aunque no "
            "tiene un término de caducidad específico, se aplica el criterio jurisprudencial de inmediatez "
            "con un plazo razonable aproximado de seis meses, resolviendo el juez en máximo diez días "
            "hábiles y permitiendo impugnación dentro de los tres días siguientes a la notificación. Sus "
            "efectos pueden ser determinantes: desde ordenar la reconexión inmediata de servicios, exigir "
            "respuestas de fondo a peticiones, rectificar procedimientos administrativos irregulares, "
            "hasta garantizar atención adecuada en canales digitales, siendo particularmente importante "
            "para la protección de poblaciones vulnerables."
        ),
        fundamento_juridico=(
            "Articulo 86 Constitución Política de Colombia, Decreto 2591 de 1991 que reglamenta la "
            "acción de tutela."
        ),
    ),
    TermRule(
        tipo=ActionType.NULIDAD,
        normalize_start=False,
        start_field=None,
        descripcion=(
            "La acción de nulidad simple en el contexto de servicios públicos es un mecanismo "
            "jurisdiccional que busca preservar la legalidad del ordenamiento jurídico verificando que "
            "los actos administrativos se ajusten a las normas vigentes. Procede principalmente contra "
            "actos administrativos de carácter general y, excepcionalmente, contra actos particulares "
            "cuando no persiga el restablecimiento de un derecho subjetivo, se trate de recuperar bienes "
            "públicos, los efectos del acto afecten gravemente el orden público, o la ley lo consagre "
            "expresamente.\n"
            "Los actos administrativos particulares pueden ser objeto de nulidad simple cuando afectan el "
            "interés de la comunidad en casos de grave afectación del orden público, político, económico "
            "(como reconocimientos ilegales de prestaciones que generan cargas fiscales insostenibles), "
            "social o ecológico. La \"teoría de los móviles y finalidades\" desarrollada por el Consejo de "
            "Estado permite esta acción cuando el acto particular compromete un interés comunitario de "
            "naturaleza e importancia superior o desborda el ámbito individual al resquebrajar el orden "
            "jurídico con proyección sobre el patrimonio nacional. También procede en casos taxativos "
            "como la recuperación de bienes de uso público o protección de intereses colectivos "
            "reconocidos por leyes especiales.\n"
            "Esta acción no está sujeta a término de caducidad, pudiendo interponerse en cualquier "
            "momento, y no requiere conciliación previa como requisito de procedibilidad. Puede ser "
            "ejercida por cualquier persona, reflejando su carácter público y su objetivo de proteger la "
            "legalidad objetiva más allá de intereses particulares, produciendo efectos exclusivamente "
            "sobre la restauración del orden jurídico en abstracto."
        ),
        fundamento_juridico=(
            "Fundamento normativo\n"
            "* Código de Procedimiento Administrativo y de lo Contencioso Administrativo (Ley 1437 de 2011)\n"
            "* Jurisprudencia del Consejo de Estado, especialmente la \"teoría de móviles y finalidades\""
        ),
    ),
    TermRule(
        tipo=ActionType.NULIDAD_RESTABLECIMIENTO,
        normalize_start=False,
        start_field=None,
        anchor_hour=MIDNIGHT_ANCHOR_HOUR,
        steps=(
            TermStep("inicioTerminoDeLaAccion", "calendario", amount=1),
            TermStep("fechaCaducidad", "meses", "inicioTerminoDeLaAccion", 4),
        ),
        descripcion=(
            "La acción de nulidad y restablecimiento del derecho en servicios públicos domiciliarios es "
            "un mecanismo judicial que permite a los usuarios controvertir actos administrativos que "
            "afectan sus derechos, contando con un término general de caducidad de cuatro meses desde la "
            "notificación del acto, aunque, excepcionalmente y bajo unas condiciones especificas, para "
            "prestaciones periódicas, pueden interponerse en cualquier tiempo. Este proceso requiere "
            "conciliación extrajudicial como requisito obligatorio, cuya solicitud suspende el término de "
            "caducidad hasta su culminación, ya sea por acuerdo, expedición de constancias o transcurso "
            "de tres meses."
        ),
        fundamento_juridico="CPACA (Ley 1437 de 2011), Art. 138.",
    ),
    TermRule(
        tipo=ActionType.CUMPLIMIENTO,
        start_field="fechaRadicacionRenuencia",
        steps=(
            TermStep("fechaSiguiente", "siguiente_habil", published=False),
            TermStep("fechaConfiguracionRenuencia", "habiles", "fechaSiguiente", 10),
        ),
        descripcion=(
            "La acción de cumplimiento es un mecanismo constitucional que permite exigir judicialmente el "
            "cumplimiento de leyes o actos administrativos, en el ámbito de los servicios públicos "
            "domiciliarios. El principal requisito de procedibilidad es la constitución de la renuencia "
            "mediante solicitud formal a la autoridad, configurándose cuando esta ratifica su "
            "incumplimiento o no responde dentro de diez días hábiles a la solicitud. Este requisito puede "
            "omitirse excepcionalmente ante peligro inminente de perjuicio irremediable. La acción debe "
            "identificar claramente la norma incumplida con mandato imperativo. No procede cuando el "
            "afectado disponga de otro instrumento judicial para lograr el cumplimiento, cuando se busque "
            "el cumplimiento de normas que establezcan gastos, o cuando el derecho pueda garantizarse "
            "mediante acción de tutela. A diferencia de otros procesos contencioso-administrativos, no es "
            "necesario agotar la conciliación."
        ),
        fundamento_juridico="Ley 393 de 1997.",
    ),
    TermRule(
        tipo=ActionType.SILENCIO,
        legacy=True,
        normalize_start=False,
        start_field="fechaVencimientoTermino",
        steps=(TermStep("fechaReconocimientoSilencio", "calendario", amount=3),),
        descripcion=SILENCIO_POSITIVO,
        fundamento_juridico=LEY_142_ART_158,
    ),
)


def build_rule_table(rules) -> Mapping[ActionType, TermRule]:
    """
    Index rules by action type, rejecting duplicates and gaps.

    Raises:
        RuntimeError: If an ActionType has no rule or more than one
    """
    table: Dict[ActionType, TermRule] = {}
    for rule in rules:
        if rule.tipo in table:
            raise RuntimeError(f"Duplicate term rule for {rule.tipo.value}")
        known_fields = {START}
        for step in rule.steps:
            if step.operation not in OPERATIONS:
                raise RuntimeError(
                    f"Unknown operation '{step.operation}' in rule {rule.tipo.value}"
                )
            # Steps may only read the start date or an earlier milestone
            if step.source not in known_fields:
                raise RuntimeError(
                    f"Step '{step.field}' of rule {rule.tipo.value} reads unknown field '{step.source}'"
                )
            known_fields.add(step.field)
        table[rule.tipo] = rule

    missing = [tipo.value for tipo in ActionType if tipo not in table]
    if missing:
        raise RuntimeError(f"Missing term rules for: {', '.join(missing)}")

    return MappingProxyType(table)


TERM_RULES: Mapping[ActionType, TermRule] = build_rule_table(_RULES)


def apply_rule(rule: TermRule, start: datetime) -> TermResult:
    """
    Run a rule pipeline from an anchored start date.

    Args:
        rule: Rule to apply
        start: Start date already anchored with `rule.anchor_hour`

    Returns:
        TermResult with the published milestones in step order
    """
    if rule.normalize_start and not is_business_day(start):
        start = next_business_day(start)

    values: Dict[str, datetime] = {START: start}
    fechas: Dict[str, str] = {}

    if rule.start_field:
        fechas[rule.start_field] = format_date(start)

    for step in rule.steps:
        operation = OPERATIONS[step.operation]
        values[step.field] = operation(values[step.source], step.amount)
        if step.published:
            fechas[step.field] = format_date(values[step.field])

    return TermResult(
        tipo=rule.tipo,
        fechas=fechas,
        descripcion=rule.descripcion,
        fundamento_juridico=rule.fundamento_juridico,
    )
