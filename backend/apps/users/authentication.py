from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


class EmailBoundJWTAuthentication(JWTAuthentication):
    """
    JWT Bearer que además exige que el claim `email` coincida con el email
    actual del usuario. Cambiar credenciales o dar de baja la cuenta invalida
    los tokens emitidos antes.
    """

    def get_user(self, validated_token):
        user = super().get_user(validated_token)

        if not user.is_active:
            raise AuthenticationFailed('Usuario inactivo', code='user_inactive')

        if validated_token.get('email') != user.email:
            raise AuthenticationFailed('Token inválido para las credenciales actuales', code='token_email_mismatch')

        return user
