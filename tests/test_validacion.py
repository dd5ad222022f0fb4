from cuentas.utils.validacion import (
    es_email,
    validar_email,
    validar_login,
    validar_nueva_contrasena,
    validar_registro,
)


def campos(errores):
    return [e["campo"] for e in errores]


def test_es_email():
    assert es_email("ana@x.com")
    assert not es_email("")
    assert not es_email(None)
    assert not es_email("ana")
    assert not es_email("ana@")


def test_login_acumula_errores():
    assert campos(validar_login("", "")) == ["email", "contrasena"]
    assert validar_login("ana@x.com", "abcde") == []


def test_registro_acumula_todos_los_errores():
    errores = validar_registro("", "no-email", "123", "abc", "xyz")
    assert campos(errores) == ["nombre", "email", "telefono", "contrasena", "repetir_contrasena"]


def test_registro_telefono_exactamente_ocho():
    assert "telefono" in campos(validar_registro("Ana", "ana@x.com", "123456789", "abcde", "abcde"))
    assert validar_registro("Ana", "ana@x.com", "12345678", "abcde", "abcde") == []


def test_registro_contrasenas_distintas():
    errores = validar_registro("Ana", "ana@x.com", "12345678", "abcde", "abcdf")
    assert errores == [{"campo": "repetir_contrasena", "msg": "Las contraseñas no son iguales"}]


def test_validar_email():
    assert validar_email("ana@x.com") == []
    assert validar_email("x")[0]["msg"] == "El Correo Electrónico no es válido"


def test_nueva_contrasena():
    assert validar_nueva_contrasena("abcde", "abcde") == []
    assert campos(validar_nueva_contrasena("abc", "abd")) == ["contrasena", "contrasenaRepetida"]
