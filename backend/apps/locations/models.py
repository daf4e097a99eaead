from django.conf import settings
from django.db import models

from core.models import SoftDeleteModel

# =============================================================================
# E-COMMERCE ARCHITECTURE: Locations
# =============================================================================
# STATUS: Completo
# PURPOSE: Jerarquía Provincia -> Localidad -> Dirección para envíos
# BUSINESS LOGIC:
# - Provincias y localidades no se pueden borrar si tienen hijos (PROTECT)
# - Una dirección puede quedar sin usuario (SET_NULL) si se elimina la cuenta
# =============================================================================


class Province(SoftDeleteModel):
    name = models.CharField(max_length=255)

    class Meta:
        verbose_name = "Province"
        verbose_name_plural = "Provinces"
        ordering = ['name']

    def __str__(self):
        return self.name


class Locality(SoftDeleteModel):
    name = models.CharField(max_length=255)
    province = models.ForeignKey(Province, related_name='localities', on_delete=models.PROTECT)

    class Meta:
        verbose_name = "Locality"
        verbose_name_plural = "Localities"
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.province.name})"


class Address(SoftDeleteModel):
    street = models.CharField(max_length=255)
    number = models.PositiveIntegerField()
    floor = models.CharField(max_length=50, blank=True, null=True)
    apartment = models.CharField(max_length=50, blank=True, null=True)
    postal_code = models.PositiveIntegerField()
    locality = models.ForeignKey(Locality, related_name='addresses', on_delete=models.PROTECT)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='addresses',
        on_delete=models.SET_NULL,
        null=True, blank=True
    )

    class Meta:
        verbose_name = "Address"
        verbose_name_plural = "Addresses"
        ordering = ['id']

    def __str__(self):
        return f"{self.street} {self.number}, {self.locality.name}"
