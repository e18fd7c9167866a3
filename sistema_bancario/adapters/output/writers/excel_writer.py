"""
Adaptador de salida: Escritor de extractos en Excel.

Genera un archivo Excel con 2 hojas:
- Hoja 1 (Resumen): una fila por cuenta con saldo y totales.
- Hoja 2 (Movimientos): una fila por movimiento de todas las cuentas,
  ordenados por id (orden cronológico).
"""

from pathlib import Path

import pandas as pd

from sistema_bancario.domain.exceptions import ExportacionError
from sistema_bancario.domain.models.usuario import Usuario
from sistema_bancario.domain.ports.extracto_writer import ExtractoWriter

COLUMNAS_RESUMEN = [
    "Cédula",
    "Titular",
    "Cuenta",
    "Tipo",
    "Nombre",
    "Saldo",
    "Num Consignaciones",
    "Total Consignaciones",
    "Num Retiros",
    "Total Retiros",
]

COLUMNAS_MOVIMIENTOS = [
    "Cuenta",
    "Tipo Cuenta",
    "Id",
    "Fecha",
    "Tipo",
    "Monto",
    "Saldo Anterior",
    "Saldo Nuevo",
]


class ExcelWriter(ExtractoWriter):
    """Genera extractos Excel con formato estandarizado."""

    def write_extracto(self, usuario: Usuario, output_path: Path) -> Path:
        """Escribe el extracto de un usuario a Excel.

        Args:
            usuario: Usuario cuyas cuentas se exportan.
            output_path: Ruta donde crear el archivo. Si no termina en .xlsx,
                        se le agrega la extensión.

        Returns:
            Ruta del archivo creado.
        """
        # Asegurar extensión .xlsx
        if output_path.suffix.lower() != ".xlsx":
            output_path = output_path.with_suffix(".xlsx")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            self._escribir_excel(usuario, output_path)
        except Exception as e:
            raise ExportacionError(str(output_path), str(e))

        return output_path

    @staticmethod
    def filas_resumen(usuario: Usuario) -> list[dict]:
        filas = []
        for cuenta in usuario.cuentas:
            consignaciones = [m.monto for m in cuenta.movimientos if not m.es_retiro]
            retiros = [m.monto for m in cuenta.movimientos if m.es_retiro]
            filas.append(
                {
                    "Cédula": usuario.cedula,
                    "Titular": usuario.nombre,
                    "Cuenta": cuenta.id,
                    "Tipo": cuenta.tipo,
                    "Nombre": cuenta.nombre,
                    "Saldo": cuenta.saldo,
                    "Num Consignaciones": len(consignaciones),
                    "Total Consignaciones": sum(consignaciones),
                    "Num Retiros": len(retiros),
                    "Total Retiros": sum(retiros),
                }
            )
        return filas

    @staticmethod
    def filas_movimientos(usuario: Usuario) -> list[dict]:
        movimientos = sorted(
            ((cuenta, mov) for cuenta in usuario.cuentas for mov in cuenta.movimientos),
            key=lambda par: par[1].id,
        )
        return [
            {
                "Cuenta": cuenta.id,
                "Tipo Cuenta": cuenta.tipo,
                "Id": mov.id,
                "Fecha": mov.fecha,
                "Tipo": mov.tipo,
                "Monto": mov.monto,
                "Saldo Anterior": mov.saldo_anterior,
                "Saldo Nuevo": mov.saldo_nuevo,
            }
            for cuenta, mov in movimientos
        ]

    # =================================================================
    # MÉTODO PRIVADO: Generación del Excel
    # =================================================================

    def _escribir_excel(self, usuario: Usuario, output_path: Path) -> None:
        df_resumen = pd.DataFrame(self.filas_resumen(usuario), columns=COLUMNAS_RESUMEN)
        df_movimientos = pd.DataFrame(
            self.filas_movimientos(usuario), columns=COLUMNAS_MOVIMIENTOS
        )

        with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
            df_resumen.to_excel(writer, index=False, sheet_name="Resumen")
            df_movimientos.to_excel(writer, index=False, sheet_name="Movimientos")

            workbook = writer.book
            ws_resumen = writer.sheets["Resumen"]
            ws_movimientos = writer.sheets["Movimientos"]

            # Texto para no perder ceros iniciales en cédulas e ids
            text_format = workbook.add_format({"num_format": "@"})
            money_format = workbook.add_format({"num_format": "#,##0"})

            # --- Formato Hoja Resumen ---
            ws_resumen.set_column("A:A", 14, text_format)  # Cédula
            ws_resumen.set_column("B:B", 24)  # Titular
            ws_resumen.set_column("C:C", 22, text_format)  # Cuenta
            ws_resumen.set_column("D:D", 12)  # Tipo
            ws_resumen.set_column("E:E", 20)  # Nombre
            ws_resumen.set_column("F:F", 14, money_format)  # Saldo
            ws_resumen.set_column("G:G", 18)  # Num Consignaciones
            ws_resumen.set_column("H:H", 20, money_format)  # Total Consignaciones
            ws_resumen.set_column("I:I", 12)  # Num Retiros
            ws_resumen.set_column("J:J", 14, money_format)  # Total Retiros

            # --- Formato Hoja Movimientos ---
            ws_movimientos.set_column("A:A", 22, text_format)  # Cuenta
            ws_movimientos.set_column("B:B", 12)  # Tipo Cuenta
            ws_movimientos.set_column("C:C", 16)  # Id
            ws_movimientos.set_column("D:D", 22)  # Fecha
            ws_movimientos.set_column("E:E", 14)  # Tipo
            ws_movimientos.set_column("F:H", 14, money_format)  # Montos
