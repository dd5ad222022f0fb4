def test_confirmar_con_token_valido(registrar, client, buscar_usuario):
    registrar()
    token = buscar_usuario("ana@x.com").token

    response = client.get(f"/auth/confirmar/{token}")

    assert response.status_code == 200
    assert "La cuenta se confirmó correctamente" in response.text

    usuario = buscar_usuario("ana@x.com")
    assert usuario.confirmado is True
    assert usuario.token is None


def test_confirmar_dos_veces_falla(registrar, client, buscar_usuario):
    registrar()
    token = buscar_usuario("ana@x.com").token

    assert client.get(f"/auth/confirmar/{token}").status_code == 200

    response = client.get(f"/auth/confirmar/{token}")
    assert response.status_code == 400
    assert "Hubo un error al confirmar la cuenta" in response.text
    assert buscar_usuario("ana@x.com").confirmado is True


def test_confirmar_token_inexistente(client):
    response = client.get("/auth/confirmar/no-existe")

    assert response.status_code == 400
    assert "alerta-error" in response.text
