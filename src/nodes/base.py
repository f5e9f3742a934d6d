"""
Define la interfaz común de los pasos del pipeline de pronóstico.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class PipelineNode(ABC):
    """
    Paso atómico del pipeline (descargar, recortar, clasificar, renderizar...).

    Los nodos se encadenan en `ForecastPipeline` y se comunican únicamente a
    través del diccionario de contexto: cada nodo lee las claves que necesita,
    escribe sus resultados y devuelve el mismo diccionario.

    Attributes:
        name (str): Nombre del nodo, usado en logs y en la tabla de tiempos.
    """
    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Ejecuta el paso sobre el contexto.

        Args:
            context (Dict[str, Any]): Estado compartido de la ejecución.

        Returns:
            Dict[str, Any]: El contexto con los resultados de este paso.

        Raises:
            ForecastError: Cualquier fallo del paso; el pipeline no lo captura
                más que para registrarlo.
        """
        pass

    def _require(self, context: Dict[str, Any], key: str) -> Any:
        value = context.get(key)
        if value is None:
            raise ValueError(f"[{self.name}] El contexto no contiene la clave '{key}'.")
        return value
