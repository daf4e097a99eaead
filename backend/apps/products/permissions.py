# =============================================================================
# E-COMMERCE ARCHITECTURE: Catalog Permissions
# =============================================================================
# STATUS: Completo
# PURPOSE: El catálogo es público para lectura
# BUSINESS LOGIC: Crear/editar/dar de baja productos, categorías, descuentos,
# variantes e imágenes requiere rol admin
# =============================================================================

from rest_framework import permissions

from apps.users.permissions import is_admin


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Lectura pública, escritura solo admin
    """
    message = 'Se requiere rol de administrador'

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin(request.user)
