# =============================================================================
# E-COMMERCE ARCHITECTURE: Error Handling
# =============================================================================
# PURPOSE: Errores de negocio + handler global de la API
# BUSINESS LOGIC: Todas las respuestas de error tienen la forma {"error": msg}
# - 400 validación / regla de negocio / stock insuficiente
# - 404 entidad inexistente o dada de baja
# - 409 valor único duplicado o registro aún referenciado
# - 500 cualquier otra excepción (se loguea con traceback)
# =============================================================================

import logging

from django.conf import settings
from django.db import IntegrityError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = 'Ocurrió un error inesperado en el servidor.'


class BusinessRuleError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'La operación no es válida.'
    default_code = 'business_rule'


class InsufficientStockError(BusinessRuleError):
    default_detail = 'Stock insuficiente.'
    default_code = 'insufficient_stock'


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'El registro entra en conflicto con datos existentes.'
    default_code = 'conflict'


def _flatten(detail):
    if isinstance(detail, list):
        return ' '.join(str(item) for item in detail)
    return str(detail)


def api_exception_handler(exc, context):
    """Handler global: traduce excepciones a respuestas {"error": ...}"""
    if isinstance(exc, ProtectedError):
        exc = ConflictError('No se puede eliminar: el registro está referenciado por otros datos.')
    elif isinstance(exc, IntegrityError):
        exc = ConflictError('Violación de restricción única o de integridad.')

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception('Error no controlado en %s', view.__class__.__name__ if view else 'api', exc_info=exc)
        data = {'error': SERVER_ERROR_MESSAGE}
        if settings.DEBUG:
            data['detail'] = str(exc)
        return Response(data, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Errores de campo de serializers se devuelven tal cual
    if isinstance(response.data, dict) and set(response.data) == {'detail'}:
        response.data = {'error': _flatten(response.data['detail'])}
    elif isinstance(response.data, list):
        response.data = {'error': _flatten(response.data)}

    return response
