# =============================================================================
# E-COMMERCE ARCHITECTURE: Role Permissions
# =============================================================================
# STATUS: Completo
# PURPOSE: Permisos por rol (admin / customer) y por propietario
# BUSINESS LOGIC: Admin accede a todo, el cliente solo a sus propios recursos
# =============================================================================

from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied


def is_admin(user):
    return bool(user and user.is_authenticated and user.is_admin)


class IsAdminRole(permissions.BasePermission):
    """
    Solo administradores
    """
    message = 'Se requiere rol de administrador'

    def has_permission(self, request, view):
        return is_admin(request.user)


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Solo el propietario del recurso o un admin pueden acceder
    """
    message = 'No tiene permiso para acceder a este recurso'

    def has_object_permission(self, request, view, obj):
        if is_admin(request.user):
            return True

        owner = getattr(obj, 'user', obj)
        return owner == request.user


def check_owner_or_admin(request, obj):
    """Equivalente a check_object_permissions para vistas basadas en funciones"""
    permission = IsOwnerOrAdmin()
    if not permission.has_object_permission(request, None, obj):
        raise PermissionDenied(permission.message)
