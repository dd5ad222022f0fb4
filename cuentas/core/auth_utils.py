def get_user_safe(request):
    return getattr(request.state, "usuario", None)


def get_csrf_token(request):
    try:
        return request.session.get("csrf_token", "")
    except AssertionError:
        # SessionMiddleware no instalado
        return ""
