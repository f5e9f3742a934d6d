from typing import Dict

from src.domain.schemas.alert import AlertStatus, ColorDetectionResult


def format_summary(detection: ColorDetectionResult, alert_status: AlertStatus) -> str:
    """Genera un resumen legible del estado actual de la playa."""
    lines = [
        "╔══════════════════════════════════════════════════════════════╗",
        "║               RESUMEN DE ESTADO DE PLAYA                     ║",
        "╚══════════════════════════════════════════════════════════════╝",
        "",
        "📊 Detección de Colores:",
        f"   🔴 Rojo: {detection.red_percentage}%",
        f"   🟡 Amarillo: {detection.yellow_percentage}%",
        "",
        f"🚩 Bandera Seleccionada: {alert_status.level.value.upper()}",
        f"📋 Estado: {alert_status.label_english}",
        f"📝 Estado (ES): {alert_status.label_spanish}",
        "",
        "══════════════════════════════════════════════════════════════",
    ]
    return "\n".join(lines)


def format_execution_times(run_id: str, times: Dict[str, float]) -> str:
    total = times.get("total_pipeline", 0)

    lines = [f"📊 TIEMPOS - {run_id} (Total: {total:.2f}s)"]
    for node, duration in times.items():
        if node == "total_pipeline":
            continue
        pct = (duration / total * 100) if total > 0 else 0
        lines.append(f"   • {node:<15}: {duration:.4f}s ({pct:.1f}%)")
    return "\n".join(lines)
