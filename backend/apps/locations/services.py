import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework.exceptions import NotFound

from .models import Province, Locality, Address

logger = logging.getLogger(__name__)


# -----Provincias-----

def get_province_by_name(name):
    province = Province.objects.filter(name__iexact=name.strip(), is_active=True).first()
    if province is None:
        raise NotFound(f'Provincia "{name}" no encontrada.')
    return province


def reactivate_province(province):
    # Reactivar una provincia activa no hace nada
    if not province.is_active:
        province.reactivate()
        logger.info("Provincia %s reactivada", province.pk)
    return province


# -----Localidades-----

def localities_by_province(province_id):
    if not Province.objects.filter(pk=province_id).exists():
        raise NotFound('Provincia no encontrada.')
    return Locality.objects.filter(province_id=province_id, is_active=True).select_related('province')


def deactivate_locality(pk):
    locality = Locality.objects.active().filter(pk=pk).first()
    if locality is None:
        raise NotFound('Localidad no encontrada o ya desactivada.')
    locality.deactivate()
    logger.info("Localidad %s desactivada", pk)
    return locality


def reactivate_locality(pk):
    locality = Locality.objects.inactive().filter(pk=pk).first()
    if locality is None:
        raise NotFound('Localidad no encontrada o ya está activa.')
    locality.reactivate()
    logger.info("Localidad %s reactivada", pk)
    return locality


# -----Direcciones-----

def get_active_address(pk):
    return get_object_or_404(
        Address.objects.select_related('locality__province', 'user'),
        pk=pk, is_active=True
    )


@transaction.atomic
def sync_user_addresses(user, addresses):
    """
    Sincroniza las direcciones del usuario con la lista recibida:
    lista vacía borra todas, con id actualiza, sin id crea y las que
    no aparecen se eliminan.
    """
    existing = {address.pk: address for address in user.addresses.all()}
    keep_ids = {entry['id'] for entry in addresses if entry.get('id') is not None}

    unknown = keep_ids - set(existing)
    if unknown:
        raise NotFound(f'Dirección {sorted(unknown)[0]} no encontrada para este usuario.')

    to_delete = [pk for pk in existing if pk not in keep_ids]
    if to_delete:
        Address.objects.filter(pk__in=to_delete).delete()

    for entry in addresses:
        data = {key: value for key, value in entry.items() if key != 'id'}
        if entry.get('id') is not None:
            address = existing[entry['id']]
            for field, value in data.items():
                setattr(address, field, value)
            address.save()
        else:
            Address.objects.create(user=user, **data)

    logger.info("Direcciones del usuario %s sincronizadas (%d)", user.pk, len(addresses))
