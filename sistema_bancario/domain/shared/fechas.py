"""
Marcas de tiempo de los movimientos.

Cada movimiento guarda dos representaciones del mismo instante:
- `id`: milisegundos desde epoch (entero, ordenable).
- `fecha`: texto legible "DD/MM/YYYY, HH:MM:SS" (solo para mostrar).
"""

from datetime import datetime

FORMATO_FECHA = "%d/%m/%Y, %H:%M:%S"


def format_fecha(instante: datetime) -> str:
    """Ejemplo: datetime(2026, 10, 19, 14, 3, 5) → '19/10/2026, 14:03:05'."""
    return instante.strftime(FORMATO_FECHA)


def a_milisegundos(instante: datetime) -> int:
    return int(instante.timestamp() * 1000)


def siguiente_id(instante: datetime, ultimo_id: int) -> int:
    """Id para un movimiento nuevo: los milisegundos del instante, o
    ultimo_id + 1 si el reloj no avanzó desde el último movimiento."""
    return max(a_milisegundos(instante), ultimo_id + 1)
