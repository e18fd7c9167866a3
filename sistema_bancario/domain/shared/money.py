"""
Utilidades para manejo de montos monetarios.

Los montos del sistema son enteros (pesos sin centavos). Este módulo
centraliza:
1. El formato que ven los usuarios en los mensajes: "$1,234,567".
2. La conversión del texto que escribe el usuario en la consola a un
   entero, rechazando con un error claro lo que no sea un monto entero.
"""

import re

_MONTO_RE = re.compile(r"^-?\d+$")


def parse_monto(text: str) -> int:
    """Convierte un texto con formato monetario a entero.

    Formatos aceptados:
    - Sin símbolo: "1000"
    - Con símbolo y comas de miles: "$1,000"
    - Con espacios alrededor: "  $ 1,000 "
    - Negativo: "-500" (la operación lo rechazará, pero se parsea)

    Raises:
        ValueError: Si el texto está vacío, tiene decimales o no es numérico.

    Ejemplos:
        >>> parse_monto("$1,000")
        1000
        >>> parse_monto("250")
        250
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_monto espera str, recibió {type(text).__name__}")
    if not text.strip():
        raise ValueError("El texto del monto está vacío")

    cleaned = text.strip().replace("$", "").replace(" ", "").replace(",", "")

    if not _MONTO_RE.match(cleaned):
        raise ValueError(f"Monto no válido: '{text}'. Use solo pesos enteros, ej: 1000")

    return int(cleaned)


def format_money(amount: int) -> str:
    """Formatea un monto entero como string monetario legible.

    Ejemplos:
        >>> format_money(1234567)
        '$1,234,567'
        >>> format_money(0)
        '$0'
        >>> format_money(-50)
        '-$50'
    """
    if amount < 0:
        return f"-${abs(amount):,}"
    return f"${amount:,}"
