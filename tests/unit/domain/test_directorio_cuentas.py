"""
Tests para el directorio de cuentas: resolución de referencias.

Orden esperado: id exacto → tipo → cuenta por defecto (solo sin referencia).
"""

import pytest

from sistema_bancario.domain.exceptions import CuentaNoEncontradaError
from sistema_bancario.domain.models import (
    Cuenta,
    PorDefecto,
    PorIdentificador,
    PorTipo,
)
from sistema_bancario.domain.services.directorio_cuentas import (
    candidatas,
    crear_cuentas_iniciales,
    cuenta_por_defecto,
    reemplazar_cuenta,
    resolver_cuenta,
)


class TestCandidatas:
    def test_none_es_por_defecto(self):
        assert candidatas(None) == (PorDefecto(),)

    def test_texto_vacio_es_por_defecto(self):
        assert candidatas("  ") == (PorDefecto(),)

    def test_texto_se_prueba_como_id_y_luego_como_tipo(self):
        assert candidatas("ahorros") == (PorIdentificador("ahorros"), PorTipo("ahorros"))

    def test_referencia_tipada_se_respeta(self):
        assert candidatas(PorTipo("corriente")) == (PorTipo("corriente"),)


class TestResolverCuenta:
    def test_por_identificador(self, usuario):
        assert resolver_cuenta(usuario, "123-corriente").tipo == "corriente"

    def test_por_tipo(self, usuario):
        assert resolver_cuenta(usuario, "corriente").id == "123-corriente"

    def test_sin_referencia_usa_ahorros(self, usuario):
        assert resolver_cuenta(usuario).tipo == "ahorros"

    def test_referencia_tipada(self, usuario):
        assert resolver_cuenta(usuario, PorIdentificador("123-ahorros")).tipo == "ahorros"

    def test_por_identificador_no_cae_a_tipo(self, usuario):
        """Una referencia tipada por id no se interpreta como tipo."""
        with pytest.raises(CuentaNoEncontradaError):
            resolver_cuenta(usuario, PorIdentificador("corriente"))

    def test_el_id_tiene_prioridad_sobre_el_tipo(self, crear_usuario):
        """Si un texto coincide con el id de una cuenta y el tipo de otra, gana el id."""
        usuario = crear_usuario(
            cuentas=(
                Cuenta(id="especial", tipo="ahorros", nombre="A"),
                Cuenta(id="ahorros", tipo="corriente", nombre="B"),
            )
        )
        assert resolver_cuenta(usuario, "ahorros").nombre == "B"

    def test_referencia_desconocida_no_usa_la_por_defecto(self, usuario):
        with pytest.raises(CuentaNoEncontradaError, match="Cuenta no encontrada"):
            resolver_cuenta(usuario, "inversion")

    def test_mensaje_de_error_personalizado(self, usuario):
        with pytest.raises(CuentaNoEncontradaError, match="Cuenta destino no encontrada"):
            resolver_cuenta(usuario, "inversion", "Cuenta destino no encontrada")


class TestCuentaPorDefecto:
    def test_sin_ahorros_usa_la_primera(self, crear_usuario):
        usuario = crear_usuario(
            cuentas=(Cuenta.nueva("123", "corriente"), Cuenta.nueva("123", "nomina"))
        )
        assert cuenta_por_defecto(usuario).tipo == "corriente"

    def test_ahorros_aunque_no_sea_la_primera(self, crear_usuario):
        usuario = crear_usuario(
            cuentas=(Cuenta.nueva("123", "corriente"), Cuenta.nueva("123", "ahorros"))
        )
        assert cuenta_por_defecto(usuario).tipo == "ahorros"


class TestReemplazarCuenta:
    def test_reemplaza_sin_modificar_el_original(self, usuario):
        nueva = Cuenta(id="123-ahorros", tipo="ahorros", nombre="Renombrada")
        actualizado = reemplazar_cuenta(usuario, nueva)
        assert actualizado.cuentas[0].nombre == "Renombrada"
        assert usuario.cuentas[0].nombre == "Cuenta de ahorros"

    def test_cuenta_ajena_lanza_error(self, usuario):
        with pytest.raises(CuentaNoEncontradaError):
            reemplazar_cuenta(usuario, Cuenta.nueva("999", "ahorros"))


def test_crear_cuentas_iniciales():
    cuentas = crear_cuentas_iniciales("123", ("ahorros", "corriente"))
    assert [c.id for c in cuentas] == ["123-ahorros", "123-corriente"]
    assert all(c.saldo == 0 for c in cuentas)
