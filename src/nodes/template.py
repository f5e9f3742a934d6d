"""
Nodo que prepara el HTML del reporte para el nivel de alerta actual.

La plantilla contiene tres capas superpuestas, una por nivel, marcadas como:

    <div class="flag-status-item status-overlay" id="status-red">
    <div class="flag-status-item status-overlay hidden" id="status-yellow">
    <div class="flag-status-item status-overlay hidden" id="status-calm">

y un marcador de fecha `<span class="date-text">...</span>`.
"""
import datetime as dt
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict

from src.domain.errors import TemplateError
from src.domain.schemas.alert import AlertLevel, AlertStatus
from src.nodes.base import PipelineNode

HIDDEN_CLASS = "hidden"

_OVERLAY_RE = re.compile(
    r'(?P<open><div\s+class=")(?P<classes>[^"]*\bstatus-overlay\b[^"]*)'
    r'(?P<close>"\s+id="status-(?P<level>[a-z]+)")'
)
_DATE_RE = re.compile(r'(<span class="date-text">)[^<]*(</span>)')


def format_report_date(date: dt.date) -> str:
    """Ej.: 'Sunday, October 18, 2026'."""
    return f"{date:%A}, {date:%B} {date.day}, {date.year}"


def mutate_template(template: str, status: AlertStatus, date: dt.date) -> str:
    """
    Muestra solo la capa del nivel de `status` y actualiza la fecha.

    Todas las capas se ocultan y luego se descubre la del nivel actual, en una
    sola pasada, así que aplicarlo dos veces da el mismo resultado.

    Raises:
        TemplateError: Falta alguna de las tres capas o el marcador de fecha.
    """
    found = {m.group("level") for m in _OVERLAY_RE.finditer(template)}
    missing = [level.value for level in AlertLevel if level.value not in found]
    if missing:
        raise TemplateError(f"La plantilla no contiene las capas: {', '.join('status-' + m for m in missing)}")
    if not _DATE_RE.search(template):
        raise TemplateError('La plantilla no contiene el marcador <span class="date-text">.')

    def _toggle(match: re.Match) -> str:
        classes = [c for c in match.group("classes").split() if c != HIDDEN_CLASS]
        if match.group("level") != status.level.value:
            classes.append(HIDDEN_CLASS)
        return f'{match.group("open")}{" ".join(classes)}{match.group("close")}'

    html = _OVERLAY_RE.sub(_toggle, template)
    return _DATE_RE.sub(lambda m: f"{m.group(1)}{format_report_date(date)}{m.group(2)}", html, count=1)


class TemplateMutatorNode(PipelineNode):
    """
    Lee la plantilla estática, aplica el nivel de alerta y escribe el HTML que
    se va a renderizar.
    """
    def __init__(
        self,
        template_path: Path,
        output_path: Path,
        today: Callable[[], dt.date] = dt.date.today,
        name: str = "template_mutator"
    ):
        """
        Args:
            template_path (Path): Plantilla original (no se modifica).
            output_path (Path): HTML generado; debe quedar junto a `images/`
                para que resuelvan las rutas relativas de la plantilla.
            today (Callable[[], date]): Fuente de la fecha del reporte.
            name (str): Nombre del nodo.
        """
        super().__init__(name)
        self.template_path = Path(template_path)
        self.output_path = Path(output_path)
        self.today = today

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Context Inputs:
            - `alert_status` (AlertStatus)

        Context Outputs:
            - `report_html_path` (Path)
        """
        status: AlertStatus = self._require(context, "alert_status")
        logging.info("[%s] Actualizando HTML con estado de alerta...", self.name)

        try:
            template = self.template_path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateError(f"[{self.name}] No se pudo leer la plantilla '{self.template_path}': {e}") from e

        html = mutate_template(template, status, self.today())
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(html, encoding="utf-8")

        context["report_html_path"] = self.output_path
        logging.info("[%s] HTML actualizado: capa %s visible (%s).",
                     self.name, status.level.value.upper(), status.label)
        return context
