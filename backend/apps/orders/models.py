from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Sum
from django.utils import timezone

from core.models import SoftDeleteModel

# =============================================================================
# E-COMMERCE ARCHITECTURE: Purchase Orders
# =============================================================================
# STATUS: Completo
# PURPOSE: Órdenes de compra con líneas que reservan stock de variantes
# BUSINESS LOGIC:
# - El subtotal de cada línea es un snapshot al momento de la compra
# - total = suma de subtotales de las líneas activas
# - Toda mutación de líneas ajusta current_stock de la variante (ver services)
# =============================================================================


class PurchaseOrder(SoftDeleteModel):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='orders', on_delete=models.PROTECT)
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    purchased_at = models.DateTimeField(default=timezone.now)
    shipping_address = models.CharField(max_length=255)

    class Meta:
        verbose_name = "Purchase Order"
        verbose_name_plural = "Purchase Orders"
        ordering = ['-purchased_at', '-id']

    def __str__(self):
        return f"Orden #{self.pk} - {self.user.email}"

    def recalculate_total(self):
        total = self.lines.filter(is_active=True).aggregate(total=Sum('subtotal'))['total']
        self.total = total or Decimal('0.00')
        self.save(update_fields=['total'])
        return self.total


class PurchaseOrderLine(SoftDeleteModel):
    order = models.ForeignKey(PurchaseOrder, related_name='lines', on_delete=models.CASCADE)
    variant = models.ForeignKey('products.ProductVariant', related_name='order_lines', on_delete=models.PROTECT)
    quantity = models.PositiveIntegerField()
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        verbose_name = "Purchase Order Line"
        verbose_name_plural = "Purchase Order Lines"
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.variant} (orden #{self.order_id})"
