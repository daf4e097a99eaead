from rest_framework_simplejwt.tokens import RefreshToken


def tokens_for_user(user):
    """
    Par refresh/access con claims extra `email` y `role`.

    El access token copia los claims del refresh, así que ambos quedan
    atados al email vigente de la cuenta.
    """
    refresh = RefreshToken.for_user(user)
    refresh['email'] = user.email
    refresh['role'] = user.role
    return {
        'token': str(refresh.access_token),
        'refresh': str(refresh),
    }
