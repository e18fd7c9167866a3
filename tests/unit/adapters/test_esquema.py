"""
Tests para la normalización del documento persistido.

Los registros se escriben a mano con la forma de cada versión, tal como
los habría dejado la aplicación en su momento.
"""

import pytest

from sistema_bancario.adapters.persistence.esquema import (
    VERSION_ACTUAL,
    VERSION_LISTA,
    VERSION_PLANA,
    RegistroIlegible,
    detectar_version,
    documento_desde_tabla,
    normalizar_registro,
    tabla_desde_documento,
)


def _movimiento(id=1, tipo="consignacion", monto=100, anterior=0, nuevo=100) -> dict:
    return {
        "id": id,
        "tipo": tipo,
        "monto": monto,
        "fecha": "19/10/2026, 14:03:05",
        "saldoAnterior": anterior,
        "saldoNuevo": nuevo,
    }


REGISTRO_V1 = {
    "nombre": "Ana",
    "cedula": "123",
    "celular": "3001234567",
    "email": "ana@correo.com",
    "password": "1234",
    "saldo": 100,
    "movimientos": [_movimiento()],
}

REGISTRO_V2 = {
    "id": "456",
    "nombre": "Luis",
    "cedula": "456",
    "celular": "3119876543",
    "email": "luis@correo.com",
    "password": "abcd",
    "cuentas": [
        {"id": "456-corriente", "tipo": "corriente", "saldo": 50, "movimientos": []},
    ],
    "intentosFallidos": 2,
}

REGISTRO_V3 = {
    "id": "789",
    "nombre": "Eva",
    "cedula": "789",
    "celular": "3201112233",
    "email": "eva@correo.com",
    "password": "clave",
    "cuentas": {
        "ahorros": {"id": "789-ahorros", "nombre": "Mis ahorros", "saldo": 0, "movimientos": []},
        "corriente": {"id": "789-corriente", "nombre": "Cuenta corriente", "saldo": 0, "movimientos": []},
    },
    "intentosFallidos": 0,
    "bloqueado": True,
}


class TestDetectarVersion:
    def test_versiones(self):
        assert detectar_version(REGISTRO_V1) == VERSION_PLANA
        assert detectar_version(REGISTRO_V2) == VERSION_LISTA
        assert detectar_version(REGISTRO_V3) == VERSION_ACTUAL


class TestNormalizarRegistro:
    def test_v1_pasa_a_cuenta_de_ahorros(self):
        registro = normalizar_registro(REGISTRO_V1, "123")

        ahorros = registro["cuentas"]["ahorros"]
        assert ahorros["id"] == "123-ahorros"
        assert ahorros["saldo"] == 100
        assert len(ahorros["movimientos"]) == 1
        assert registro["cuentas"]["corriente"]["saldo"] == 0
        assert registro["id"] == "123"
        assert registro["intentosFallidos"] == 0
        assert registro["bloqueado"] is False

    def test_v2_lista_se_indexa_por_tipo(self):
        registro = normalizar_registro(REGISTRO_V2, "456")

        assert set(registro["cuentas"]) == {"ahorros", "corriente"}
        assert registro["cuentas"]["corriente"]["saldo"] == 50
        assert registro["cuentas"]["corriente"]["nombre"] == "Cuenta corriente"
        assert registro["intentosFallidos"] == 2

    def test_v3_se_conserva(self):
        registro = normalizar_registro(REGISTRO_V3, "789")
        assert registro["cuentas"]["ahorros"]["nombre"] == "Mis ahorros"
        assert registro["bloqueado"] is True

    def test_no_modifica_el_original(self):
        original = {**REGISTRO_V1}
        normalizar_registro(original, "123")
        assert "cuentas" not in original

    def test_sin_cedula_usa_la_clave(self):
        registro = normalizar_registro({"nombre": "X", "saldo": 0}, "555")
        assert registro["cedula"] == "555"
        assert registro["cuentas"]["ahorros"]["id"] == "555-ahorros"

    @pytest.mark.parametrize("saldo", [float("nan"), float("inf")])
    def test_saldo_no_finito_es_cero(self, saldo):
        registro = normalizar_registro({**REGISTRO_V1, "saldo": saldo, "movimientos": []}, "123")
        assert registro["cuentas"]["ahorros"]["saldo"] == 0

    @pytest.mark.parametrize("saldo, esperado", [(10.5, 11), (10.4, 10), (0.5, 1), (7.0, 7)])
    def test_saldo_con_decimales_se_redondea(self, saldo, esperado):
        registro = normalizar_registro({**REGISTRO_V1, "saldo": saldo, "movimientos": []}, "123")
        assert registro["cuentas"]["ahorros"]["saldo"] == esperado

    def test_movimiento_con_decimales_se_redondea_igual_que_el_saldo(self):
        v1 = {**REGISTRO_V1, "saldo": 10.5, "movimientos": [
            _movimiento(tipo="consignación", monto=10.5, anterior=0, nuevo=10.5),
        ]}
        tabla, ilegibles = tabla_desde_documento({"123": v1})

        assert ilegibles == {}
        ahorros = tabla["123"].cuentas[0]
        assert ahorros.saldo == 11
        assert ahorros.movimientos[0].monto == 11
        assert ahorros.movimientos[0].saldo_nuevo == 11
        assert ahorros.es_consistente

    @pytest.mark.parametrize("saldo", ["cien", None, True, [1]])
    def test_saldo_no_numerico_es_cero(self, saldo):
        registro = normalizar_registro({**REGISTRO_V1, "saldo": saldo, "movimientos": []}, "123")
        assert registro["cuentas"]["ahorros"]["saldo"] == 0

    def test_alias_de_tipo_de_movimiento(self):
        v1 = {**REGISTRO_V1, "movimientos": [_movimiento(tipo="consignación")]}
        registro = normalizar_registro(v1, "123")
        assert registro["cuentas"]["ahorros"]["movimientos"][0]["tipo"] == "consignacion"

    def test_tipos_configurados_se_agregan(self):
        registro = normalizar_registro(REGISTRO_V3, "789", ("ahorros", "corriente", "nomina"))
        assert registro["cuentas"]["nomina"]["id"] == "789-nomina"


class TestTabla:
    def test_documento_mixto(self):
        tabla, ilegibles = tabla_desde_documento(
            {"123": REGISTRO_V1, "456": REGISTRO_V2, "789": REGISTRO_V3}
        )

        assert ilegibles == {}
        assert tabla["123"].cuentas[0].movimientos[0].cuenta_id == "123-ahorros"
        assert tabla["456"].intentos_fallidos == 2
        assert tabla["789"].bloqueado

    def test_escritura_siempre_es_v3(self):
        tabla, _ = tabla_desde_documento({"123": REGISTRO_V1, "456": REGISTRO_V2})
        documento = documento_desde_tabla(tabla)

        for registro in documento.values():
            assert detectar_version(registro) == VERSION_ACTUAL
            assert "saldo" not in registro
        assert documento["123"]["cuentas"]["ahorros"]["movimientos"][0]["saldoNuevo"] == 100

    def test_releer_lo_escrito_da_la_misma_tabla(self):
        tabla, _ = tabla_desde_documento({"123": REGISTRO_V1, "789": REGISTRO_V3})
        assert tabla_desde_documento(documento_desde_tabla(tabla)) == (tabla, {})


class TestRegistrosIlegibles:
    def test_registro_que_no_es_objeto(self):
        tabla, ilegibles = tabla_desde_documento({"123": "texto", "789": REGISTRO_V3})

        assert list(tabla) == ["789"]
        assert ilegibles["123"] == RegistroIlegible("texto", "no es un objeto")

    def test_movimiento_inconsistente_no_tumba_a_los_demas(self):
        v1 = {**REGISTRO_V1, "movimientos": [_movimiento(nuevo=90)]}
        tabla, ilegibles = tabla_desde_documento({"123": v1, "456": REGISTRO_V2})

        assert list(tabla) == ["456"]
        assert ilegibles["123"].registro is v1
        assert "inconsistentes" in ilegibles["123"].motivo

    def test_decimales_que_rompen_la_cadena_de_saldos(self):
        # 10.5 + 10.5 = 21, pero cada monto redondeado suma 22.
        v1 = {**REGISTRO_V1, "saldo": 21, "movimientos": [
            _movimiento(id=1, monto=10.5, anterior=0, nuevo=10.5),
            _movimiento(id=2, monto=10.5, anterior=10.5, nuevo=21),
        ]}
        tabla, ilegibles = tabla_desde_documento({"123": v1, "789": REGISTRO_V3})

        assert "123" in ilegibles
        assert "789" in tabla

    def test_se_escriben_sin_cambios(self):
        tabla, ilegibles = tabla_desde_documento({"123": "texto", "789": REGISTRO_V3})
        documento = documento_desde_tabla(tabla, ilegibles)

        assert documento["123"] == "texto"
        assert detectar_version(documento["789"]) == VERSION_ACTUAL

    def test_no_se_sobrescriben(self):
        tabla, ilegibles = tabla_desde_documento({"123": "texto", "789": REGISTRO_V3})
        tabla["123"] = tabla["789"]

        with pytest.raises(ValueError, match="'123' no se pudo leer"):
            documento_desde_tabla(tabla, ilegibles)
