"""
Define el artefacto final de una ejecución del pipeline de pronóstico.
"""
from dataclasses import dataclass
from pathlib import Path

from src.domain.schemas.alert import AlertStatus, ColorDetectionResult


@dataclass(frozen=True)
class ForecastResult:
    """
    Resultado de una ejecución completa, entregado a los consumidores externos
    (notificaciones, endpoint de estado).

    Attributes:
        image_processed (bool): Siempre True; una ejecución fallida no produce
            resultado.
        image_path (Path): Imagen del pronóstico recortada.
        color_detection (ColorDetectionResult): Conteo de colores.
        alert_status (AlertStatus): Nivel de alerta derivado.
        output_image_path (Path): Reporte final renderizado.
    """
    image_processed: bool
    image_path: Path
    color_detection: ColorDetectionResult
    alert_status: AlertStatus
    output_image_path: Path


@dataclass(frozen=True)
class OutputPaths:
    """
    Rutas fijas en disco usadas por cada ejecución.
    """
    template: Path
    forecast_image: Path
    report_html: Path
    capture: Path
    output_image: Path

    @classmethod
    def under(cls, public_dir: Path, output_ext: str = ".png") -> "OutputPaths":
        public_dir = Path(public_dir)
        return cls(
            template=public_dir / "template.html",
            forecast_image=public_dir / "images" / "forecast.jpg",
            report_html=public_dir / "index.html",
            capture=public_dir / "final" / "temp_capture.png",
            output_image=public_dir / "final" / f"output{output_ext}",
        )
