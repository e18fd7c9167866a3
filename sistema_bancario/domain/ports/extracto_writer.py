"""
Puerto de salida: Escritor de extractos.

Define el contrato para exportar las cuentas y movimientos de un usuario
a un archivo (hoy Excel). El servicio Banco solo entrega el Usuario; el
formato lo decide el adaptador.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from sistema_bancario.domain.models.usuario import Usuario


class ExtractoWriter(ABC):
    """Interfaz para escribir el extracto de un usuario."""

    @abstractmethod
    def write_extracto(self, usuario: Usuario, output_path: Path) -> Path:
        """Escribe el extracto de todas las cuentas del usuario.

        Layout: Hoja 1 = Resumen (una fila por cuenta),
        Hoja 2 = Movimientos (una fila por movimiento).

        Args:
            usuario: Usuario cuyas cuentas se exportan.
            output_path: Ruta donde crear el archivo de salida.

        Returns:
            Ruta real del archivo creado (puede diferir si se añadió extensión).

        Raises:
            ExportacionError: Si falla la escritura.
        """
        ...
