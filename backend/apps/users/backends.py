from django.contrib.auth.backends import ModelBackend
from django.db.models import Q
from .models import User

class EmailOrUsernameModelBackend(ModelBackend):
    """
    Authentication backend that accepts either the email or the username as login.
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None:
            username = kwargs.get(User.USERNAME_FIELD)

        if username is None or password is None:
            return None

        # email o username; las cuentas activas tienen prioridad
        user = (User.objects
                .filter(Q(email__iexact=username) | Q(username=username))
                .order_by('-is_active', 'id')
                .first())
        if user is None:
            # hash en blanco para igualar tiempos de respuesta
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
