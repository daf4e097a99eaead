import logging
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import Q
from rest_framework.exceptions import AuthenticationFailed, NotFound

from apps.locations.services import sync_user_addresses
from apps.products.models import Image
from core.exceptions import BusinessRuleError, ConflictError
from .models import User

logger = logging.getLogger(__name__)

# =============================================================================
# E-COMMERCE ARCHITECTURE: Account Services
# =============================================================================
# STATUS: Completo
# PURPOSE: Reglas de negocio de cuentas: perfil, credenciales, baja y reactivación
# BUSINESS LOGIC:
# - Email y username deben ser únicos entre cuentas activas (409)
# - Dar de baja libera email/username; reactivar exige valores nuevos
# =============================================================================


def user_queryset():
    return User.objects.select_related('profile_image').prefetch_related('addresses__locality__province')


def get_active_user(pk):
    user = user_queryset().filter(pk=pk, is_active=True).first()
    if user is None:
        raise NotFound('Usuario no encontrado o inactivo.')
    return user


def _email_taken(email, exclude_pk=None):
    qs = User.objects.filter(Q(email__iexact=email) | Q(username__iexact=email), is_active=True)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


@transaction.atomic
def update_profile(user, data):
    addresses = data.pop('addresses', None)

    for field, value in data.items():
        setattr(user, field, value)
    user.save()

    # None = no se envió la lista; [] = borrar todas
    if addresses is not None:
        sync_user_addresses(user, addresses)

    logger.info("Perfil actualizado para usuario %s", user.pk)
    return get_active_user(user.pk)


@transaction.atomic
def upload_profile_image(user, uploaded_file, request=None):
    """Guarda el archivo con nombre UUID bajo UPLOAD_DIR y crea/actualiza la Image del perfil"""
    extension = os.path.splitext(uploaded_file.name)[1].lower()
    stored_name = default_storage.save(f'{uuid.uuid4().hex}{extension}', uploaded_file)
    url = f'{settings.MEDIA_URL}{stored_name}'
    if request is not None:
        url = request.build_absolute_uri(url)

    if user.profile_image_id:
        image = user.profile_image
        image.name = url
        image.is_active = True
        image.save(update_fields=['name', 'is_active'])
    else:
        image = Image.objects.create(name=url)
        user.profile_image = image
        user.save(update_fields=['profile_image', 'updated_at'])

    logger.info("Imagen de perfil actualizada para usuario %s: %s", user.pk, stored_name)
    return get_active_user(user.pk)


@transaction.atomic
def update_credentials(user, current_password, new_email=None, new_password=None):
    """
    Cambia email y/o contraseña. El cambio de email también cambia el
    username y deja inválidos los tokens anteriores.
    """
    if not user.check_password(current_password):
        raise AuthenticationFailed('La contraseña actual es incorrecta.')

    update_fields = ['updated_at']

    if new_email:
        new_email = new_email.lower()
        if new_email != user.email:
            if _email_taken(new_email, exclude_pk=user.pk):
                raise ConflictError('El nuevo email ya está en uso por otra cuenta activa.')
            user.email = new_email
            user.username = new_email
            update_fields += ['email', 'username']

    if new_password:
        if user.check_password(new_password):
            raise BusinessRuleError('La nueva contraseña debe ser distinta de la actual.')
        user.set_password(new_password)
        update_fields.append('password')

    user.save(update_fields=update_fields)
    logger.info("Credenciales actualizadas para usuario %s (%s)", user.pk, ', '.join(update_fields[1:]))
    return user


def deactivate_user(user):
    if not user.is_active:
        raise BusinessRuleError('El usuario ya está inactivo.')
    user.deactivate()
    logger.info("Usuario %s desactivado", user.pk)
    return user


@transaction.atomic
def reactivate_user(pk, email, username):
    user = User.objects.select_for_update().filter(pk=pk).first()
    if user is None:
        raise NotFound('Usuario no encontrado.')
    if user.is_active:
        raise BusinessRuleError('El usuario ya está activo.')

    email = email.lower()
    if _email_taken(email, exclude_pk=user.pk):
        raise ConflictError('El email ya pertenece a otra cuenta activa.')
    if User.objects.filter(username__iexact=username, is_active=True).exclude(pk=user.pk).exists():
        raise ConflictError('El username ya pertenece a otra cuenta activa.')

    user.reactivate(email=email, username=username)
    logger.info("Usuario %s reactivado con email %s", user.pk, email)
    return get_active_user(user.pk)
