from email_validator import EmailNotValidError, validate_email


def error(campo: str, msg: str) -> dict:
    return {"campo": campo, "msg": msg}


def es_email(valor: str | None) -> bool:
    if not valor:
        return False
    try:
        validate_email(valor, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def normalizar_email(valor: str) -> str:
    """Forma canónica para guardar y buscar: el email no distingue mayúsculas."""
    try:
        return validate_email(valor, check_deliverability=False).normalized.lower()
    except EmailNotValidError:
        return valor.strip().lower()


# =========================
# FORMULARIOS
# =========================
def validar_login(email: str, contrasena: str) -> list[dict]:
    errores = []
    if not es_email(email):
        errores.append(error("email", "El email es obligatorio"))
    if not contrasena:
        errores.append(error("contrasena", "La contraseña es obligatoria"))
    return errores


def validar_registro(
    nombre: str,
    email: str,
    telefono: str,
    contrasena: str,
    repetir_contrasena: str,
) -> list[dict]:
    errores = []
    if not nombre.strip():
        errores.append(error("nombre", "El nombre es obligatorio"))
    if not es_email(email):
        errores.append(error("email", "El Correo Electrónico no es válido"))
    if len(telefono) != 8:
        errores.append(error("telefono", "El Teléfono no es de 8 números"))
    errores.extend(validar_nueva_contrasena(contrasena, repetir_contrasena, "repetir_contrasena"))
    return errores


def validar_email(email: str) -> list[dict]:
    if not es_email(email):
        return [error("email", "El Correo Electrónico no es válido")]
    return []


def validar_nueva_contrasena(
    contrasena: str,
    repetida: str,
    campo_repetida: str = "contrasenaRepetida",
) -> list[dict]:
    errores = []
    if len(contrasena) < 5:
        errores.append(error("contrasena", "La contraseña debe contener al menos 5 caracteres"))
    if repetida != contrasena:
        errores.append(error(campo_repetida, "Las contraseñas no son iguales"))
    return errores
