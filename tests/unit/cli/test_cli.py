"""
Tests del CLI: cada comando corre main() contra un JSON temporal.
"""

import json

import pytest

from sistema_bancario.cli.main import main


@pytest.fixture
def datos(tmp_path, monkeypatch):
    for variable in ("BANCO_DATOS", "BANCO_MAX_INTENTOS", "BANCO_BITACORA", "BANCO_LOG_LEVEL"):
        monkeypatch.delenv(variable, raising=False)
    return tmp_path / "usuarios.json"


def _cli(datos, *args):
    main(["--datos", str(datos), *args])


def _registrar(datos, cedula="123", nombre="Ana"):
    _cli(
        datos,
        "registrar",
        "--nombre", nombre,
        "--cedula", cedula,
        "--celular", "3001234567",
        "--email", f"{nombre.lower()}@correo.com",
        "--password", "1234",
    )


def test_registrar(datos, capsys):
    _registrar(datos)
    assert "✅ Usuario registrado exitosamente" in capsys.readouterr().out
    assert "123" in json.loads(datos.read_text(encoding="utf-8"))


def test_consignar_retirar_y_saldo(datos, capsys):
    _registrar(datos)
    _cli(datos, "consignar", "--cedula", "123", "--password", "1234", "--monto", "$1,000")
    _cli(datos, "retirar", "--cedula", "123", "--password", "1234", "--monto", "300")
    _cli(datos, "saldo", "--cedula", "123", "--password", "1234")

    salida = capsys.readouterr().out
    assert "Consignación exitosa. Saldo actual en ahorros: $1,000" in salida
    assert "Retiro exitoso. Saldo actual en ahorros: $700" in salida
    assert "El saldo de Ana en ahorros es $700" in salida


def test_fallo_sale_con_codigo_1(datos, capsys):
    _registrar(datos)
    with pytest.raises(SystemExit) as exc:
        _cli(datos, "retirar", "--cedula", "123", "--password", "1234", "--monto", "50")
    assert exc.value.code == 1
    assert "❌ Saldo insuficiente" in capsys.readouterr().out


def test_monto_invalido_lo_rechaza_argparse(datos):
    with pytest.raises(SystemExit) as exc:
        _cli(datos, "consignar", "--cedula", "123", "--password", "1234", "--monto", "10.5")
    assert exc.value.code == 2


def test_password_incorrecta_cuenta_como_intento(datos, capsys):
    _registrar(datos)
    with pytest.raises(SystemExit):
        _cli(datos, "saldo", "--cedula", "123", "--password", "mala")
    assert "Intentos restantes: 2" in capsys.readouterr().out
    assert json.loads(datos.read_text(encoding="utf-8"))["123"]["intentosFallidos"] == 1


def test_transferir(datos, capsys):
    _registrar(datos)
    _registrar(datos, "456", "Luis")
    _cli(datos, "consignar", "--cedula", "123", "--password", "1234", "--monto", "70")
    _cli(datos, "transferir", "--cedula", "123", "--password", "1234", "--monto", "50",
         "--destino", "456")

    assert "Transferencia de $50 a Luis exitosa. Nuevo saldo: $20" in capsys.readouterr().out
    documento = json.loads(datos.read_text(encoding="utf-8"))
    assert documento["456"]["cuentas"]["ahorros"]["saldo"] == 50


def test_movimientos_y_perfil(datos, capsys):
    _registrar(datos)
    _cli(datos, "consignar", "--cedula", "123", "--password", "1234", "--monto", "10",
         "--cuenta", "corriente")
    _cli(datos, "movimientos", "--cedula", "123", "--password", "1234", "--cuenta", "corriente")
    _cli(datos, "perfil", "--cedula", "123", "--password", "1234", "--email", "ana@nuevo.com")

    salida = capsys.readouterr().out
    assert "Historial de movimientos Ana (corriente):" in salida
    assert "✅ Datos actualizados" in salida


def test_cambiar_password(datos, capsys):
    _registrar(datos)
    _cli(datos, "cambiar-password", "--cedula", "123", "--password", "1234", "--nuevo", "abcd")
    _cli(datos, "login", "--cedula", "123", "--password", "abcd")

    salida = capsys.readouterr().out
    assert "Contraseña actualizada exitosamente" in salida
    assert "Bienvenido, Ana" in salida


def test_extracto(datos, tmp_path, capsys):
    _registrar(datos)
    salida = tmp_path / "ana.xlsx"
    _cli(datos, "extracto", "--cedula", "123", "--password", "1234", "-o", str(salida))
    assert salida.exists()
    assert f"Extracto generado: {salida}" in capsys.readouterr().out


def test_configuracion_invalida(datos, monkeypatch, capsys):
    monkeypatch.setenv("BANCO_MAX_INTENTOS", "cero")
    with pytest.raises(SystemExit) as exc:
        _cli(datos, "login", "--cedula", "123", "--password", "1234")
    assert exc.value.code == 1
    assert "BANCO_MAX_INTENTOS" in capsys.readouterr().out


def test_verbose_imprime_el_resumen(datos, capsys):
    _registrar(datos)
    _cli(datos, "-v", "consignar", "--cedula", "123", "--password", "1234", "--monto", "100")

    salida = capsys.readouterr().out
    assert "RESUMEN DE LA SESIÓN" in salida
    assert "Movimientos:          1" in salida
    assert "Logins exitosos:      1" in salida


def test_sin_verbose_no_hay_resumen(datos, capsys):
    _registrar(datos)
    assert "RESUMEN DE LA SESIÓN" not in capsys.readouterr().out


def test_resumen_tambien_si_falla(datos, capsys):
    _registrar(datos)
    with pytest.raises(SystemExit):
        _cli(datos, "-v", "login", "--cedula", "123", "--password", "mala")
    assert "Logins fallidos:      1" in capsys.readouterr().out


def test_log_level_invalido(datos, monkeypatch, capsys):
    monkeypatch.setenv("BANCO_LOG_LEVEL", "ruidoso")
    with pytest.raises(SystemExit) as exc:
        _cli(datos, "login", "--cedula", "123", "--password", "1234")
    assert exc.value.code == 1
    assert "BANCO_LOG_LEVEL" in capsys.readouterr().out


def test_registro_ilegible_se_avisa_y_se_conserva(datos, capsys):
    _registrar(datos)
    documento = json.loads(datos.read_text(encoding="utf-8"))
    documento["999"] = "texto"
    datos.write_text(json.dumps(documento), encoding="utf-8")

    _cli(datos, "consignar", "--cedula", "123", "--password", "1234", "--monto", "5")

    salida = capsys.readouterr().out
    assert "⚠️  Registro '999' ignorado: no es un objeto" in salida
    assert "✅ Consignación exitosa" in salida
    assert json.loads(datos.read_text(encoding="utf-8"))["999"] == "texto"
