import re

from cuentas.core.security import decode_token


def confirmar(client, buscar_usuario, email="ana@x.com"):
    token = buscar_usuario(email).token
    client.get(f"/auth/confirmar/{token}")


def login(client, csrf, email="ana@x.com", contrasena="abcde"):
    return client.post(
        "/auth/login",
        data={"email": email, "contrasena": contrasena, "_csrf": csrf()},
        follow_redirects=False,
    )


def test_login_formulario(client):
    response = client.get("/auth/login")
    assert response.status_code == 200
    assert 'name="_csrf"' in response.text


def test_login_campos_vacios(client, csrf):
    response = login(client, csrf, email="", contrasena="")

    assert response.status_code == 400
    assert "El email es obligatorio" in response.text
    assert "La contraseña es obligatoria" in response.text


def test_login_usuario_no_existe(client, csrf):
    response = login(client, csrf, email="nadie@x.com")

    assert response.status_code == 401
    assert "El Usuario no existe" in response.text


def test_login_sin_confirmar_aunque_la_contrasena_sea_correcta(registrar, client, csrf):
    registrar()

    response = login(client, csrf)

    assert response.status_code == 401
    assert "La Cuenta no ha sido confirmada" in response.text
    assert "La Contraseña es incorrecta" not in response.text
    assert "_token" not in client.cookies


def test_login_contrasena_incorrecta(registrar, client, csrf, buscar_usuario):
    registrar()
    confirmar(client, buscar_usuario)

    response = login(client, csrf, contrasena="zzzzz")

    assert response.status_code == 401
    assert "La Contraseña es incorrecta" in response.text


def test_login_correcto_emite_cookie_de_sesion(registrar, client, csrf, buscar_usuario):
    registrar()
    confirmar(client, buscar_usuario)

    response = login(client, csrf)

    assert response.status_code == 303
    assert response.headers["location"] == "/"

    set_cookie = response.headers["set-cookie"]
    assert "_token=" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "Max-Age=" in set_cookie

    payload = decode_token(response.cookies["_token"])
    assert payload["sub"] == str(buscar_usuario("ana@x.com").id)
    assert payload["nombre"] == "Ana"
    assert "exp" in payload


def test_inicio_requiere_sesion(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/auth/login"


def test_inicio_con_sesion(registrar, client, csrf, buscar_usuario):
    registrar()
    confirmar(client, buscar_usuario)
    login(client, csrf)

    response = client.get("/")

    assert response.status_code == 200
    assert "Hola, Ana" in response.text


def test_cerrar_sesion(registrar, client, csrf, buscar_usuario):
    registrar()
    confirmar(client, buscar_usuario)
    login(client, csrf)
    token_csrf = csrf("/auth/registro")

    response = client.post("/auth/cerrar-sesion", data={"_csrf": token_csrf}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/auth/login"
    assert client.get("/", follow_redirects=False).status_code == 303


def test_login_email_no_distingue_mayusculas(registrar, client, csrf, buscar_usuario):
    registrar()
    confirmar(client, buscar_usuario)

    response = login(client, csrf, email="ANA@x.com")

    assert response.status_code == 303


def test_csrf_disponible_en_la_primera_visita(client):
    response = client.get("/auth/olvide-password")
    token = re.search(r'name="_csrf" value="([^"]+)"', response.text).group(1)

    assert token
    response = client.post("/auth/olvide-password", data={"email": "nadie@x.com", "_csrf": token})
    assert response.status_code == 404
