"""
Utilidades compartidas del dominio.

No dependen de ninguna librería externa; solo operan sobre tipos nativos.

Uso:
    from sistema_bancario.domain.shared.money import format_money, parse_monto
    from sistema_bancario.domain.shared.fechas import format_fecha, siguiente_id
"""
