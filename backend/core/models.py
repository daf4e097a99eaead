from django.db import models

# =============================================================================
# E-COMMERCE ARCHITECTURE: Soft Delete Base
# =============================================================================
# PURPOSE: Ninguna entidad se borra físicamente, se marca is_active=False
# BUSINESS LOGIC: Listados por defecto solo muestran registros activos
# =============================================================================


class SoftDeleteQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def inactive(self):
        return self.filter(is_active=False)


class SoftDeleteModel(models.Model):
    is_active = models.BooleanField(default=True)

    objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        abstract = True

    def deactivate(self):
        """Baja lógica"""
        self.is_active = False
        self.save(update_fields=['is_active'])

    def reactivate(self):
        self.is_active = True
        self.save(update_fields=['is_active'])
